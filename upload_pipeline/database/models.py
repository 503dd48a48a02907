from dataclasses import dataclass, field
from typing import Any


@dataclass
class Record:
    """A row owned by the host application, as seen by the upload hooks.

    ``attributes`` holds both persisted columns and virtual attributes such as
    the raw upload. ``scenario`` names the mode the record is being saved in.
    """

    id: int | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    scenario: str = "default"

    @property
    def is_new_record(self) -> bool:
        return self.id is None
