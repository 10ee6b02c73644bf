import multiprocessing
import os
import logging.config
import re

import structlog


# Recommended: 2-4 workers per CPU core for Django
cpu_count = multiprocessing.cpu_count()
max_workers = 10
workers = min(cpu_count * 2 + 1, max_workers)
# One thread per in-flight registration; the homeserver call is the slow part
threads = int(os.environ.get("GUNICORN_THREADS", "8"))
worker_class = "gthread"

# Must stay above HOMESERVER_TIMEOUT so a slow homeserver yields a 502, not a killed worker
timeout = 60
keepalive = 5

graceful_timeout = 30
max_requests = 1000
max_requests_jitter = 50

# The pooled homeserver session is created lazily in each worker, after the fork
preload_app = True

loglevel = "info"
errorlog = "-"
accesslog = "-"

# 192.168.1.1 - - [27/Dec/2025:17:30:00 +0000] "POST /register HTTP/1.1" 200 123 "-" "curl/8.0" rt=0.412
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" rt=%(L)s'

ACCESS_LINE = re.compile(
    r'(?P<remote>\S+) \S+ (?P<user>\S+) \[(?P<time>[^\]]+)\] '
    r'"(?P<method>\S+) (?P<path>\S+) (?P<version>[^"]+)" '
    r'(?P<status>\d{3}) (?P<size>\S+) "(?P<referer>[^"]*)" "(?P<agent>[^"]*)" '
    r"rt=(?P<duration>[\d.]+)\s*\Z"
)


def _int_or_zero(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def access_line_fields(logger, name, event_dict):
    """
    Split a gunicorn access line into structured fields.
    Lines that do not match are left untouched.
    """
    if event_dict.get("logger") != "gunicorn.access":
        return event_dict

    m = ACCESS_LINE.match(event_dict.get("event", "") or "")
    if not m:
        return event_dict

    fields = m.groupdict()
    fields["status"] = _int_or_zero(fields["status"])
    fields["size"] = _int_or_zero(fields["size"])
    fields["duration"] = float(fields["duration"])
    for key in ("user", "referer"):
        if fields[key] == "-":
            fields[key] = None

    event_dict.update(fields)
    event_dict["event"] = "gunicorn.request_handling"
    return event_dict


def error_line_event(logger, name, event_dict):
    """Name boot and signal messages of gunicorn.error so they can be filtered."""
    if event_dict.get("logger") != "gunicorn.error":
        return event_dict

    raw = event_dict.get("event")
    if not isinstance(raw, str):
        return event_dict

    event_dict["message"] = raw
    lowered = raw.lower()
    if lowered.startswith(("starting", "listening", "using", "booting")):
        event_dict["event"] = "gunicorn.booting"
    elif lowered.startswith("handling signal"):
        event_dict["event"] = "gunicorn.signal_handling"
    return event_dict


pre_chain = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    access_line_fields,
    error_line_event,
]

logconfig_dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "root": {"level": "INFO", "handlers": ["default"]},
    "loggers": {
        "gunicorn.error": {
            "level": "INFO",
            "handlers": ["default"],
            "propagate": False,
            "qualname": "gunicorn.error",
        },
        "gunicorn.access": {
            "level": "INFO",
            "handlers": ["default"],
            "propagate": False,
            "qualname": "gunicorn.access",
        },
    },
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "logfmt_formatter",
        },
    },
    "formatters": {
        "logfmt_formatter": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.LogfmtRenderer(),
            "foreign_pre_chain": pre_chain,
        }
    },
}

logging.config.dictConfig(logconfig_dict)
