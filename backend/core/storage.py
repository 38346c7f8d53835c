"""In-memory store for records the UI saves."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from backend.schemas.records import Calculation, CalculationCreate, ProRata, ProRataCreate


class MemStorage:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calculations: Dict[str, Calculation] = {}
        self._pro_rata: Dict[str, ProRata] = {}

    def _stamp(self) -> dict:
        return {"id": str(uuid.uuid4()), "createdAt": datetime.now(timezone.utc)}

    def get_calculations(self) -> List[Calculation]:
        """Newest first, by insertion order."""
        with self._lock:
            return list(reversed(self._calculations.values()))

    def get_calculation(self, record_id: str) -> Optional[Calculation]:
        with self._lock:
            return self._calculations.get(record_id)

    def create_calculation(self, data: CalculationCreate) -> Calculation:
        record = Calculation(**data.model_dump(), **self._stamp())
        with self._lock:
            self._calculations[record.id] = record
        return record

    def get_pro_rata_calculations(self) -> List[ProRata]:
        with self._lock:
            return list(reversed(self._pro_rata.values()))

    def get_pro_rata_calculation(self, record_id: str) -> Optional[ProRata]:
        with self._lock:
            return self._pro_rata.get(record_id)

    def create_pro_rata_calculation(self, data: ProRataCreate) -> ProRata:
        record = ProRata(**data.model_dump(), **self._stamp())
        with self._lock:
            self._pro_rata[record.id] = record
        return record


storage = MemStorage()
