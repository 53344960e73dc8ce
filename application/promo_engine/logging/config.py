"""
Logging configuration for the promotion rule engine.
JSON to stderr by default; local files or Firehose shipping when enabled.
"""
# Settings
from promo_engine.config.settings import PromoEngineConfigs
configs = PromoEngineConfigs()


class LoggingConfig:
    """Logging switches resolved once from the environment"""

    # Core settings
    LOG_LEVEL = configs.LOG_LEVEL
    LOG_DIR = configs.LOG_DIR
    LOG_TO_FILE = configs.LOG_TO_FILE
    FIREHOSE_ENABLED = configs.FIREHOSE_ENABLED

    # Stream Names
    APP_LOGS_STREAM_NAME = configs.APP_LOGS_STREAM_NAME
    LOG_BUFFER_TIMEOUT = configs.LOG_BUFFER_TIMEOUT

    # Buffer sizes
    APP_LOGS_CAPACITY = configs.APP_LOGS_CAPACITY

    # Firehose settings
    FIREHOSE_REGION_NAME = configs.FIREHOSE_REGION_NAME
    FIREHOSE_ACCESS_KEY_ID = configs.FIREHOSE_ACCESS_KEY_ID
    FIREHOSE_SECRET_ACCESS_KEY = configs.FIREHOSE_SECRET_ACCESS_KEY
    FIREHOSE_RETRY_COUNT = configs.FIREHOSE_RETRY_COUNT
    FIREHOSE_RETRY_DELAY = configs.FIREHOSE_RETRY_DELAY

    # Slack
    SLACK_ALERTS_ENABLED = configs.SLACK_ALERTS_ENABLED
    SLACK_WEBHOOK_URL = configs.SLACK_WEBHOOK_URL

    @classmethod
    def is_valid_config(cls):
        """Validate configuration - only check Firehose when enabled"""
        if cls.FIREHOSE_ENABLED:
            if not cls.FIREHOSE_ACCESS_KEY_ID or not cls.FIREHOSE_SECRET_ACCESS_KEY:
                return False, "Firehose credentials not configured"
        if cls.SLACK_ALERTS_ENABLED and not cls.SLACK_WEBHOOK_URL:
            return False, "Slack alerts enabled without SLACK_WEBHOOK_URL"
        return True, "Configuration is valid"
