"""Resource vectors and Kubernetes-style quantity parsing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

_BINARY_SUFFIXES = {
    "Ki": 1024,
    "Mi": 1024**2,
    "Gi": 1024**3,
    "Ti": 1024**4,
    "Pi": 1024**5,
}
_DECIMAL_SUFFIXES = {
    "k": 10**3,
    "M": 10**6,
    "G": 10**9,
    "T": 10**12,
    "P": 10**15,
}
_QUANTITY_RE = re.compile(r"^([0-9]+(?:\.[0-9]+)?)([a-zA-Z]*)$")


def _split_quantity(value: Any) -> tuple[Decimal, str]:
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Invalid quantity: {value!r}")
        return Decimal(str(value)), ""
    match = _QUANTITY_RE.match(str(value).strip())
    if not match:
        raise ValueError(f"Invalid quantity: {value!r}")
    return Decimal(match.group(1)), match.group(2)


def parse_cpu(value: Any) -> int:
    """Parse a CPU quantity (``"2"``, ``"500m"``, ``1.5``) into millicores.

    Fractional millicores round up.
    """
    number, suffix = _split_quantity(value)
    if suffix == "m":
        return math.ceil(number)
    if suffix:
        raise ValueError(f"Invalid CPU quantity: {value!r}")
    return math.ceil(number * 1000)


def parse_bytes(value: Any) -> int:
    """Parse a memory/storage quantity (``"1Gi"``, ``"512M"``, ``1024``) into bytes."""
    number, suffix = _split_quantity(value)
    if not suffix:
        return math.ceil(number)
    if suffix in _BINARY_SUFFIXES:
        return math.ceil(number * _BINARY_SUFFIXES[suffix])
    if suffix in _DECIMAL_SUFFIXES:
        return math.ceil(number * _DECIMAL_SUFFIXES[suffix])
    raise ValueError(f"Invalid quantity suffix: {value!r}")


def parse_count(value: Any) -> int:
    number, suffix = _split_quantity(value)
    if suffix or number != int(number):
        raise ValueError(f"Invalid count: {value!r}")
    return int(number)


@dataclass
class Resource:
    """Compute resources of a node or pod.

    Rendered the same way for requested and allocatable vectors so the two
    lines of a node dump line up field by field.
    """

    milli_cpu: int = 0
    memory: int = 0
    ephemeral_storage: int = 0
    allowed_pod_number: int = 0
    scalar_resources: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_resource_list(cls, resources: Mapping[str, Any] | None) -> Resource:
        """Build a Resource from a ``{"cpu": "2", "memory": "1Gi"}`` style mapping.

        Names other than cpu, memory, ephemeral-storage and pods are kept as
        scalar (extended) resources.
        """
        r = cls()
        for name, quantity in (resources or {}).items():
            if name == "cpu":
                r.milli_cpu = parse_cpu(quantity)
            elif name == "memory":
                r.memory = parse_bytes(quantity)
            elif name == "ephemeral-storage":
                r.ephemeral_storage = parse_bytes(quantity)
            elif name == "pods":
                r.allowed_pod_number = parse_count(quantity)
            else:
                r.scalar_resources[name] = parse_count(quantity)
        return r

    def add(self, other: Resource) -> None:
        self.milli_cpu += other.milli_cpu
        self.memory += other.memory
        self.ephemeral_storage += other.ephemeral_storage
        self.allowed_pod_number += other.allowed_pod_number
        for name, quantity in other.scalar_resources.items():
            self.scalar_resources[name] = self.scalar_resources.get(name, 0) + quantity

    def subtract(self, other: Resource) -> None:
        """Subtract ``other``, clamping every field at zero."""
        self.milli_cpu = max(0, self.milli_cpu - other.milli_cpu)
        self.memory = max(0, self.memory - other.memory)
        self.ephemeral_storage = max(0, self.ephemeral_storage - other.ephemeral_storage)
        self.allowed_pod_number = max(0, self.allowed_pod_number - other.allowed_pod_number)
        for name, quantity in other.scalar_resources.items():
            self.scalar_resources[name] = max(0, self.scalar_resources.get(name, 0) - quantity)

    def clone(self) -> Resource:
        return Resource(
            milli_cpu=self.milli_cpu,
            memory=self.memory,
            ephemeral_storage=self.ephemeral_storage,
            allowed_pod_number=self.allowed_pod_number,
            scalar_resources=dict(self.scalar_resources),
        )

    def __str__(self) -> str:
        scalars = " ".join(f"{k}:{v}" for k, v in sorted(self.scalar_resources.items()))
        return (
            f"{{MilliCPU:{self.milli_cpu} Memory:{self.memory} "
            f"EphemeralStorage:{self.ephemeral_storage} "
            f"AllowedPodNumber:{self.allowed_pod_number} "
            f"ScalarResources:{{{scalars}}}}}"
        )
