import os
from dotenv import load_dotenv
load_dotenv()


class PromoEngineConfigs:
    def __init__(self):

        # Environment settings
        self.APPLICATION_ENVIRONMENT = os.getenv("APPLICATION_ENVIRONMENT", "LOCAL")
        self.APP_NAME = os.getenv("APP_NAME", "promo-engine")
        self.APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

        # Business clock
        self.BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "America/Argentina/Buenos_Aires")

        # Rule engine policies
        self.ZERO_DISCOUNT_ATTRIBUTION = os.getenv("ZERO_DISCOUNT_ATTRIBUTION", "false").lower() == "true"
        self.TIE_BREAK_POLICY = os.getenv("TIE_BREAK_POLICY", "input_order").strip().lower()
        self.MONEY_DECIMAL_PLACES = int(os.getenv("MONEY_DECIMAL_PLACES", "2"))

        # Logging Core settings
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_DIR = os.getenv("LOG_DIR", "logs")
        self.LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"
        self.LOG_DEBUG_PRINTS = os.getenv("LOG_DEBUG_PRINTS", "false").lower() == "true"

        # Firehose log shipping
        self.FIREHOSE_ENABLED = os.getenv("FIREHOSE_ENABLED", "false").lower() == "true"
        self.APP_LOGS_STREAM_NAME = os.getenv("APP_LOGS_STREAM_NAME", "")
        self.APP_LOGS_CAPACITY = int(os.getenv("APP_LOGS_CAPACITY", "50"))
        self.LOG_BUFFER_TIMEOUT = int(os.getenv("LOG_BUFFER_TIMEOUT", "600"))
        self.FIREHOSE_REGION_NAME = os.getenv("FIREHOSE_REGION_NAME", "sa-east-1")
        self.FIREHOSE_ACCESS_KEY_ID = os.getenv("FIREHOSE_ACCESS_KEY_ID", "")
        self.FIREHOSE_SECRET_ACCESS_KEY = os.getenv("FIREHOSE_SECRET_ACCESS_KEY", "")
        self.FIREHOSE_RETRY_COUNT = int(os.getenv("FIREHOSE_RETRY_COUNT", "3"))
        self.FIREHOSE_RETRY_DELAY = int(os.getenv("FIREHOSE_RETRY_DELAY", "1"))

        # Slack alerts
        self.SLACK_ALERTS_ENABLED = os.getenv("SLACK_ALERTS_ENABLED", "false").lower() == "true"
        self.SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK_URL", "")

        # Sentry settings
        self.SENTRY_ENABLED = os.getenv("SENTRY_ENABLED", "false").lower() == "true"
        self.SENTRY_DSN = os.getenv("SENTRY_DSN", "")
        self.SENTRY_RELEASE = os.getenv("SENTRY_RELEASE", "promo-engine@1.0.0")
        self.SENTRY_TRACES_SAMPLE_RATE = os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1")
