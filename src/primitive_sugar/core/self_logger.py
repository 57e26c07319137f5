"""
Self-Logger

Each namespace logs to itself (not to an external logging system).

Design:
- Entries kept in memory, newest last, bounded by max_entries
- Optional TSV persistence: {log_dir}/logs/{namespace}/log.tsv
- Append-only (immutable history)
- Log rotation when the TSV file exceeds its size limit
- Query logs with filters (level, custom fields, pagination)

Philosophy:
Namespaces are self-contained. They know their own methods, log their own
events, and can be queried independently. No central logging system.
"""

import csv
import hashlib
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


LEVELS = {
    'DEBUG': 10,
    'INFO': 20,
    'WARNING': 30,
    'ERROR': 40,
    'CRITICAL': 50,
}

_BASE_FIELDS = ['entry_id', 'timestamp', 'level', 'message']


class SelfLogger:
    """
    Self-logging for namespaces.

    Entries always live in memory. When a log directory is given they are
    also appended to logs/{object_id}/log.tsv.
    """

    def __init__(
        self,
        object_id: str,
        base_dir: Optional[Union[Path, str]] = None,
        min_level: str = 'INFO',
        max_entries: int = 1000,
        max_log_size: Optional[int] = None,
    ):
        """
        Initialize self-logger.

        Args:
            object_id: ID of the logging object (e.g., 'Number', 'String')
            base_dir: Base directory for TSV log storage (None = memory only)
            min_level: Entries below this level are not recorded
            max_entries: Maximum number of entries kept in memory
            max_log_size: Maximum TSV file size in bytes before rotation
                         (default: 10MB)
        """
        if min_level not in LEVELS:
            raise ValueError(f"Unknown log level: {min_level}")

        self.object_id = object_id
        self.min_level = min_level
        self.max_log_size = max_log_size or (10 * 1024 * 1024)  # 10MB default

        self._entries: deque = deque(maxlen=max_entries)

        self.log_dir: Optional[Path] = None
        self.log_file: Optional[Path] = None
        if base_dir is not None:
            self.log_dir = Path(base_dir) / 'logs' / object_id
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.log_dir / 'log.tsv'

    def is_enabled_for(self, level: str) -> bool:
        """True if entries at this level are recorded"""
        return LEVELS[level] >= LEVELS[self.min_level]

    def log(
        self,
        level: str,
        message: str,
        **kwargs,
    ) -> None:
        """
        Log an entry.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            message: Log message
            **kwargs: Additional fields to log (method, lazy, etc.)
        """
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")

        if not self.is_enabled_for(level):
            return

        timestamp = datetime.now().isoformat()
        entry = {
            'entry_id': self._generate_entry_id(timestamp, level, message),
            'timestamp': timestamp,
            'level': level,
            'message': message,
            **kwargs,
        }

        # Don't log empty fields
        entry = {k: v for k, v in entry.items() if v is not None}

        self._entries.append(entry)

        if self.log_file is not None:
            self._append_to_file(entry)

    def debug(self, message: str, **kwargs) -> None:
        """Log DEBUG level message"""
        self.log('DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log INFO level message"""
        self.log('INFO', message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log WARNING level message"""
        self.log('WARNING', message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log ERROR level message"""
        self.log('ERROR', message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        """Log CRITICAL level message"""
        self.log('CRITICAL', message, **kwargs)

    def get_logs(
        self,
        level: Optional[Union[str, List[str]]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        **filters,
    ) -> List[Dict[str, Any]]:
        """
        Get in-memory log entries, oldest first.

        Args:
            level: Filter by level (string or list of strings)
            limit: Maximum number of entries to return
            offset: Number of entries to skip
            **filters: Additional filters (e.g., method='add')

        Returns:
            List of log entries (dictionaries)
        """
        return _filter_entries(list(self._entries), level, limit, offset, filters)

    def get_persisted_logs(
        self,
        level: Optional[Union[str, List[str]]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        **filters,
    ) -> List[Dict[str, Any]]:
        """
        Get log entries from the TSV files, rotated files first.

        Values come back as strings (TSV has no types).
        """
        if self.log_dir is None:
            return []

        entries: List[Dict[str, Any]] = []
        files = sorted(self.log_dir.glob('log-*.tsv'))
        if self.log_file.exists():
            files.append(self.log_file)

        for path in files:
            with open(path, 'r', newline='') as f:
                reader = csv.DictReader(f, delimiter='\t')
                for row in reader:
                    entries.append(row)

        return _filter_entries(entries, level, limit, offset, filters)

    def clear(self) -> None:
        """Drop in-memory entries (persisted files are kept)"""
        self._entries.clear()

    def _append_to_file(self, entry: Dict[str, Any]) -> None:
        """Append one entry to the TSV log, widening the header if needed"""
        self._rotate_if_needed()

        fieldnames = self._get_fieldnames()
        new_fields = [key for key in entry if key not in fieldnames]
        is_new_file = not self.log_file.exists()

        if new_fields and not is_new_file:
            # Rewrite with the wider header so old rows keep their columns
            rows = self._read_rows(self.log_file)
            fieldnames.extend(new_fields)
            with open(self.log_file, 'w', newline='') as f:
                writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter='\t')
                writer.writeheader()
                writer.writerows(rows)
        else:
            fieldnames.extend(new_fields)

        with open(self.log_file, 'a', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter='\t')
            if is_new_file:
                writer.writeheader()
            writer.writerow(entry)

    def _get_fieldnames(self) -> List[str]:
        """Get existing fieldnames from log file"""
        if not self.log_file.exists():
            return list(_BASE_FIELDS)

        with open(self.log_file, 'r', newline='') as f:
            reader = csv.DictReader(f, delimiter='\t')
            return list(reader.fieldnames or _BASE_FIELDS)

    @staticmethod
    def _read_rows(path: Path) -> List[Dict[str, str]]:
        with open(path, 'r', newline='') as f:
            return list(csv.DictReader(f, delimiter='\t'))

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size"""
        if not self.log_file.exists():
            return

        if self.log_file.stat().st_size < self.max_log_size:
            return

        # Rotate: rename current log to log-TIMESTAMP-SEQ.tsv (sorts chronologically)
        timestamp = datetime.now().strftime('%Y%m%d-%H%M%S-%f')
        seq = 0
        rotated = self.log_dir / f'log-{timestamp}-{seq:03d}.tsv'
        while rotated.exists():
            seq += 1
            rotated = self.log_dir / f'log-{timestamp}-{seq:03d}.tsv'
        self.log_file.rename(rotated)

        # Next write creates a new log.tsv with header

    def _generate_entry_id(self, timestamp: str, level: str, message: str) -> str:
        """
        Generate unique entry ID.

        Uses hash of timestamp + object_id + level + message.
        """
        content = f"{timestamp}:{self.object_id}:{level}:{message}"
        hash_obj = hashlib.sha256(content.encode())
        return hash_obj.hexdigest()[:16]  # First 16 chars is enough


def _filter_entries(
    entries: List[Dict[str, Any]],
    level: Optional[Union[str, List[str]]],
    limit: Optional[int],
    offset: int,
    filters: Dict[str, Any],
) -> List[Dict[str, Any]]:
    # Filter by level
    if level is not None:
        if isinstance(level, str):
            level = [level]
        entries = [e for e in entries if e.get('level') in level]

    # Filter by custom fields
    for key, value in filters.items():
        entries = [e for e in entries if e.get(key) == value]

    # Apply offset and limit
    if offset > 0:
        entries = entries[offset:]

    if limit is not None:
        entries = entries[:limit]

    return entries
