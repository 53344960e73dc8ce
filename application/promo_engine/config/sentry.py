import logging

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

# Logger
from promo_engine.logging.utils import get_app_logger
logger = get_app_logger("promo_engine.sentry")

# Settings
from promo_engine.config.settings import PromoEngineConfigs
configs = PromoEngineConfigs()


def init_sentry() -> bool:
    """Initialize Sentry SDK with flag-based configuration"""
    if not configs.SENTRY_ENABLED:
        logger.info("Sentry monitoring is disabled")
        return False

    if not configs.SENTRY_DSN:
        logger.warning("SENTRY_ENABLED is true but SENTRY_DSN is not configured")
        return False

    sentry_sdk.init(
        dsn=configs.SENTRY_DSN,
        environment=configs.APPLICATION_ENVIRONMENT,
        release=configs.SENTRY_RELEASE,
        traces_sample_rate=float(configs.SENTRY_TRACES_SAMPLE_RATE),
        integrations=[
            LoggingIntegration(
                level=logging.INFO,        # Capture info and above as breadcrumbs
                event_level=logging.ERROR  # Send errors as events
            ),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
        before_send=before_send_filter,
    )

    logger.info(f"Sentry initialized successfully for environment: {configs.APPLICATION_ENVIRONMENT}")
    return True


def before_send_filter(event, hint):
    """Drop free-text order notes before sending to Sentry"""
    extra = event.get('extra')
    if isinstance(extra, dict):
        for key in list(extra.keys()):
            if 'notes' in key.lower() or 'reason' in key.lower():
                extra[key] = '[Filtered]'
    return event


def capture_exception(exception, **kwargs):
    """Wrapper to capture exceptions only if Sentry is enabled"""
    if configs.SENTRY_ENABLED:
        sentry_sdk.capture_exception(exception, **kwargs)
    logger.error(f"Exception occurred: {exception}", exc_info=exception)
