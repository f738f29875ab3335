"""
X-Ray trace header handling.

Lambda passes the trace of every invocation in `lambda-runtime-trace-id`:

    Root=1-5759e988-bd862e3fe1be46a994272793;Parent=53995c3f42cd8ad8;Sampled=1
"""

from dataclasses import dataclass
from typing import Optional

_FIELD_ORDER = ("Root", "Parent", "Sampled")


@dataclass(frozen=True)
class TraceId:
    root: str
    parent: Optional[str] = None
    sampled: Optional[str] = None

    @classmethod
    def parse(cls, header: str) -> "TraceId":
        """
        Parse a trace header. Unknown keys (Lineage, ...) are dropped.

        A bare id without any `key=value` pair is taken as the root.
        """
        if header and "=" not in header:
            return cls(root=header.strip())

        fields = dict(
            (key.strip(), value.strip())
            for key, _, value in (chunk.partition("=") for chunk in header.split(";"))
            if value
        )
        return cls(
            root=fields.get("Root", ""),
            parent=fields.get("Parent"),
            sampled=fields.get("Sampled"),
        )

    @property
    def is_sampled(self) -> bool:
        return self.sampled == "1"

    def __str__(self) -> str:
        values = (self.root, self.parent, self.sampled)
        return ";".join(f"{key}={value}" for key, value in zip(_FIELD_ORDER, values) if value)
