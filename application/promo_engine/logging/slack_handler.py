import logging
from datetime import datetime, timezone

import requests

from promo_engine.logging.config import LoggingConfig

# Settings
from promo_engine.config.settings import PromoEngineConfigs
configs = PromoEngineConfigs()


class SlackErrorHandler(logging.Handler):
    """Sends ERROR and CRITICAL logs to Slack"""
    def __init__(self, webhook: str | None = None, enabled: bool | None = None):
        super().__init__(level=logging.ERROR)
        self.webhook = webhook if webhook is not None else LoggingConfig.SLACK_WEBHOOK_URL
        if enabled is None:
            enabled = LoggingConfig.SLACK_ALERTS_ENABLED
        self.enabled = bool(self.webhook) and enabled

    def build_message(self, record) -> str:
        env = configs.APPLICATION_ENVIRONMENT.upper()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()

        lines = [
            f":mag: {env} promotion engine alert",
            "",
            f"- :clock1: Timestamp: {ts}",
            f"- :triangular_flag_on_post: Level: *{record.levelname}*",
            f"- :warning: Logger: {record.name}",
            f"- :satellite: Service: {configs.APP_NAME}",
            f"- :file_folder: Module: {record.module}",
            f"- :pushpin: Function: {record.funcName}",
            f"- :straight_ruler: Line Number: {record.lineno}",
        ]
        order_id = getattr(record, 'order_id', '')
        if order_id:
            lines.append(f"- :receipt: Order: {order_id}")
        lines.append("")
        lines.append("```" + str(record.getMessage()) + "```")
        return "\n".join(lines)

    def emit(self, record):
        if not self.enabled:
            return
        try:
            requests.post(self.webhook, json={"text": self.build_message(record)}, timeout=2)
        except requests.RequestException:
            self.handleError(record)


# Export a singleton handler instance for reuse
slack_handler = SlackErrorHandler()
