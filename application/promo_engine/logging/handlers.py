"""
Logging Handlers for the promotion engine.
JSON stream handler by default; local file or Firehose-backed buffered handler when enabled.
"""
import logging
import os
import sys
import time
from logging.handlers import MemoryHandler

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from promo_engine.logging.config import LoggingConfig
from promo_engine.logging.formatters import AppLogsJSONFormatter

# Settings
from promo_engine.config.settings import PromoEngineConfigs
configs = PromoEngineConfigs()

LOG_DEBUG_PRINTS = configs.LOG_DEBUG_PRINTS


def dbg(msg: str) -> None:
    """Lightweight debug print; enabled when LOG_DEBUG_PRINTS=true"""
    if LOG_DEBUG_PRINTS:
        print(msg)


class FireHoseHandler(logging.Handler):
    """Kinesis Firehose handler with simple retries"""

    def __init__(self, stream_name: str, client=None):
        super().__init__()
        self.stream_name = stream_name
        self.client = client or self._create_client()
        self.retry_count = LoggingConfig.FIREHOSE_RETRY_COUNT
        self.retry_delay = LoggingConfig.FIREHOSE_RETRY_DELAY

    def _create_client(self):
        return boto3.client(
            "firehose",
            region_name=LoggingConfig.FIREHOSE_REGION_NAME,
            aws_access_key_id=LoggingConfig.FIREHOSE_ACCESS_KEY_ID,
            aws_secret_access_key=LoggingConfig.FIREHOSE_SECRET_ACCESS_KEY,
            config=Config(connect_timeout=10, read_timeout=30, retries={"max_attempts": 2}),
        )

    def emit(self, record):
        self.bulk_insert([{"Data": self.format(record)}])

    def bulk_insert(self, actions):
        if not actions:
            return True

        for attempt in range(self.retry_count):
            try:
                response = self.client.put_record_batch(
                    DeliveryStreamName=self.stream_name,
                    Records=actions,
                )
                failed = response.get("FailedPutCount", 0)
                dbg(f"[Firehose:{self.stream_name}] put_record_batch attempt={attempt+1} total={len(actions)} failed={failed}")
                if failed == 0:
                    return True
            except (BotoCoreError, ClientError):
                dbg(f"[Firehose:{self.stream_name}] exception on attempt={attempt+1}, will_retry={attempt < self.retry_count - 1}")
            if attempt < self.retry_count - 1:
                time.sleep(self.retry_delay * (2 ** attempt))
        return False


class SimpleMemoryHandler(MemoryHandler):
    def __init__(self, capacity, target_handler, stream_name):
        super().__init__(capacity=capacity, target=target_handler)
        self.stream_name = stream_name
        self.buffer_timeout = LoggingConfig.LOG_BUFFER_TIMEOUT
        self.last_flush = time.time()

    def emit(self, record):
        self.buffer.append(record)
        now = time.time()
        if now - self.last_flush >= self.buffer_timeout or len(self.buffer) >= self.capacity:
            reason = "timeout" if (now - self.last_flush) >= self.buffer_timeout else "capacity"
            dbg(f"[Buffer:{self.stream_name}] triggering flush reason={reason} size={len(self.buffer)}")
            self.flush()

    def flush(self):
        self.acquire()
        try:
            if self.target and self.buffer:
                actions = [{"Data": self.format(record)} for record in self.buffer]
                ok = self.target.bulk_insert(actions)
                dbg(f"[Buffer:{self.stream_name}] flush count={len(actions)} ok={ok}")
                self.buffer.clear()
                self.last_flush = time.time()
        finally:
            self.release()


class AppLogsMemoryHandler(SimpleMemoryHandler):
    def __init__(self, stream_name: str, client=None):
        target = FireHoseHandler(stream_name, client=client)
        super().__init__(capacity=LoggingConfig.APP_LOGS_CAPACITY, target_handler=target, stream_name=stream_name)
        fmt = AppLogsJSONFormatter()
        self.setFormatter(fmt)
        target.setFormatter(fmt)


_handlers = {}


def get_local_file_handler(name: str = 'promo_engine'):
    os.makedirs(LoggingConfig.LOG_DIR, exist_ok=True)
    handler = logging.FileHandler(os.path.join(LoggingConfig.LOG_DIR, f'{name}.log'))
    handler.setFormatter(AppLogsJSONFormatter())
    return handler


def get_stream_handler():
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(AppLogsJSONFormatter())
    return handler


def get_app_handler(name: str = 'promo_engine'):
    if LoggingConfig.FIREHOSE_ENABLED:
        if 'app' not in _handlers:
            stream = LoggingConfig.APP_LOGS_STREAM_NAME or 'promo-engine-app-logs'
            _handlers['app'] = AppLogsMemoryHandler(stream)
        return _handlers['app']
    if LoggingConfig.LOG_TO_FILE:
        return get_local_file_handler(name)
    return get_stream_handler()
