"""OMI API constants."""

NOTIFICATION_PATH = "/v2/integrations/{app_id}/notification"
