"""Request log output for httpr"""

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, TextIO, Tuple


@dataclass
class RequestRecord:
    """One inbound HTTP request, as seen by the server"""
    method: str
    url: str  # path plus query string
    host: str = ""
    proto: str = "HTTP/1.1"
    remote_addr: str = ""
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def text_body(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header_map(self) -> Dict[str, List[str]]:
        """Header name to list of values, in arrival order"""
        grouped: Dict[str, List[str]] = {}
        for name, value in self.headers:
            grouped.setdefault(_canonical_header(name), []).append(value)
        return grouped


def _canonical_header(name: str) -> str:
    return "-".join(part.capitalize() for part in name.split("-"))


def format_raw(record: RequestRecord) -> str:
    """
    Format a request as an HTTP/1.1 wire dump.

    Request line, Host header, remaining headers, blank line, body.
    """
    lines = [f"{record.method} {record.url} {record.proto}"]
    if record.host:
        lines.append(f"Host: {record.host}")

    for name, value in record.headers:
        if name.lower() == "host":
            continue
        lines.append(f"{_canonical_header(name)}: {value}")

    return "\r\n".join(lines) + "\r\n\r\n" + record.text_body + "\n\n"


def to_log_dict(record: RequestRecord) -> Dict[str, Any]:
    """Build the structured log entry for a request"""
    return {
        "timestamp": record.timestamp.isoformat(),
        "remote_addr": record.remote_addr,
        "method": record.method,
        "url": record.url,
        "proto": record.proto,
        "host": record.host,
        "headers": record.header_map(),
        "content_length": len(record.body),
        "body": record.text_body,
    }


def format_json(record: RequestRecord, pretty: bool = False) -> str:
    """Format a request as a JSON log line (or indented block when pretty)"""
    entry = to_log_dict(record)
    if pretty:
        return json.dumps(entry, indent=2) + "\n"
    return json.dumps(entry, separators=(",", ":")) + "\n"


class RequestLogger:
    """
    Writes request log entries to a text stream.

    Entries are written whole under a lock, so concurrent requests never
    interleave. When constructed with a path, the logger owns the file and
    closes it on close().
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        json_format: bool = False,
        pretty: bool = False,
    ):
        self.stream = stream if stream is not None else sys.stdout
        self.json_format = json_format or pretty
        self.pretty = pretty
        self._owns_stream = False
        self._lock = Lock()

    @classmethod
    def open(cls, path: Optional[str], json_format: bool = False, pretty: bool = False) -> "RequestLogger":
        """Log to the given file (appending), or stdout when path is None"""
        if path is None:
            return cls(json_format=json_format, pretty=pretty)

        log_path = Path(path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger = cls(open(log_path, "a", encoding="utf-8"), json_format=json_format, pretty=pretty)
        logger._owns_stream = True
        return logger

    def format(self, record: RequestRecord) -> str:
        if self.json_format:
            return format_json(record, pretty=self.pretty)
        return format_raw(record)

    def log(self, record: RequestRecord) -> None:
        entry = self.format(record)
        with self._lock:
            self.stream.write(entry)
            self.stream.flush()

    def close(self) -> None:
        with self._lock:
            if self._owns_stream and not self.stream.closed:
                self.stream.close()
