"""Named click counters and the shared value-per-click setting."""
from __future__ import annotations

import json
from typing import Any

from .errors import ConflictError, NotFoundError
from .logger import get_logger
from .models import VALUE_PER_CLICK_KEY, NamedCounter, Setting, utcnow
from .storage import LockedStore


logger = get_logger(__name__)


class CounterLedger(LockedStore):
    """Owns the `counters` and `settings` tables."""

    label = "counter ledger"

    def __init__(self, default_value_per_click: Any = 0.5) -> None:
        super().__init__()
        self.default_value_per_click = default_value_per_click

    def list_counters(self) -> dict[str, dict]:
        with self.read():
            counters = NamedCounter.query.order_by(NamedCounter.name.asc()).all()
            return {counter.name: counter.to_dict() for counter in counters}

    def get_config(self) -> dict[str, Any]:
        with self.read() as session:
            setting = session.get(Setting, VALUE_PER_CLICK_KEY)
            value = json.loads(setting.value) if setting and setting.value else None
        if value is None:
            value = self.default_value_per_click
        return {VALUE_PER_CLICK_KEY: value}

    def set_config(self, value: Any) -> None:
        """Store `value` as the new value per click. No range checks are applied."""
        with self.transaction() as session:
            setting = session.get(Setting, VALUE_PER_CLICK_KEY)
            if setting is None:
                setting = Setting(key=VALUE_PER_CLICK_KEY)
                session.add(setting)
            setting.value = json.dumps(value)

    def add_counter(self, name: str) -> None:
        """Create counter `name` at zero.

        Raises:
            ConflictError: If the name is taken or is the reserved settings key.
        """
        with self.transaction() as session:
            if name == VALUE_PER_CLICK_KEY or session.get(NamedCounter, name) is not None:
                raise ConflictError("Name already exists")
            session.add(NamedCounter(name=name, count=0, last_clicked_at=None))

    def increment(self, name: str) -> dict[str, Any]:
        """Add one click to `name` and stamp it with the current time.

        Returns:
            The counter's new state, keyed like `list_counters` entries plus `name`.
        """
        with self.transaction() as session:
            counter = session.get(NamedCounter, name)
            if counter is None:
                raise NotFoundError("Name not found")
            counter.count += 1
            counter.last_clicked_at = utcnow()
            snapshot = {"name": name, **counter.to_dict()}
        return snapshot

    def reset(self) -> int:
        """Zero every counter. Returns how many counters were reset."""
        with self.transaction():
            counters = NamedCounter.query.all()
            for counter in counters:
                counter.count = 0
                counter.last_clicked_at = None
        return len(counters)

    def delete_counter(self, name: str) -> None:
        with self.transaction() as session:
            counter = session.get(NamedCounter, name)
            if counter is None:
                raise NotFoundError("Name not found")
            session.delete(counter)
