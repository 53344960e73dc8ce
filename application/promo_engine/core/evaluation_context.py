"""
Evaluation context for the rule engine using contextvars.

The engine stamps the order being evaluated here so every log line emitted
during a recalculation carries the same evaluation_id / order_id / tenant_id.
"""
from contextvars import ContextVar
import uuid


class EvaluationContext:
    def __init__(self):
        self.evaluation_id: str | None = None
        self.order_id: str | None = None
        self.tenant_id: str | None = None
        self.operation: str | None = None


_evaluation_context_var: ContextVar[EvaluationContext] = ContextVar("evaluation_context", default=EvaluationContext())


class _EvaluationContextProxy:
    def __getattr__(self, name):
        return getattr(_evaluation_context_var.get(), name)

    def __setattr__(self, name, value):
        setattr(_evaluation_context_var.get(), name, value)


evaluation_context = _EvaluationContextProxy()


def start_evaluation(order_id: str, tenant_id: str | None, operation: str):
    """Open a fresh context for one engine call and return its token."""
    ctx = EvaluationContext()
    ctx.evaluation_id = str(uuid.uuid4())
    ctx.order_id = order_id
    ctx.tenant_id = tenant_id
    ctx.operation = operation
    return _evaluation_context_var.set(ctx)


def end_evaluation(token) -> None:
    _evaluation_context_var.reset(token)


def clear_evaluation_context():
    _evaluation_context_var.set(EvaluationContext())
