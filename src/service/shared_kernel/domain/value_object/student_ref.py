"""
Student Reference Value Object

Students are owned by the student directory; seats and bookings only keep a
reference to who holds them.
"""

from typing import Optional

import attrs


@attrs.define(frozen=True)
class StudentRef:
    id: str
    name: Optional[str] = None

    def to_dict(self) -> dict[str, Optional[str]]:
        return {'id': self.id, 'name': self.name}
