"""
Logging filters that copy the engine evaluation context onto records
"""
import logging
from promo_engine.core.evaluation_context import evaluation_context


class EvaluationContextFilter(logging.Filter):
    def filter(self, record):
        record.evaluation_id = getattr(evaluation_context, 'evaluation_id', None) or ''
        record.order_id = getattr(evaluation_context, 'order_id', None) or ''
        record.tenant_id = getattr(evaluation_context, 'tenant_id', None) or ''
        record.operation = getattr(evaluation_context, 'operation', None) or ''
        return True
