"""
JSON Formatters for promotion engine logs
"""
import json
import logging
from datetime import datetime

# Settings
from promo_engine.config.settings import PromoEngineConfigs
configs = PromoEngineConfigs()

APPLICATION_ENVIRONMENT = configs.APPLICATION_ENVIRONMENT
APP_NAME = configs.APP_NAME


class BaseJSONFormatter(logging.Formatter):
    """Basic JSON formatter"""

    def __init__(self):
        super().__init__()
        self.application_environment = APPLICATION_ENVIRONMENT
        self.service = APP_NAME

    def format(self, record):
        """Convert log record to JSON format"""
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line_number': record.lineno,
            'environment': self.application_environment,
            'service': self.service,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        self.add_extra_fields(log_entry, record)

        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def add_extra_fields(self, log_entry, record):
        pass


class AppLogsJSONFormatter(BaseJSONFormatter):
    # Engine decision fields, present only on records logged with extra=
    DECISION_FIELDS = ('product_id', 'promotion_id', 'discount', 'lines')

    def add_extra_fields(self, log_entry, record):
        log_entry['evaluation_id'] = getattr(record, 'evaluation_id', '')
        log_entry['order_id'] = getattr(record, 'order_id', '')
        log_entry['tenant_id'] = getattr(record, 'tenant_id', '')
        log_entry['operation'] = getattr(record, 'operation', '')
        for name in self.DECISION_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
