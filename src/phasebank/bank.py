from __future__ import annotations

import logging
from typing import Dict, Generic, Hashable, List, TypeVar

from .content import type_key
from .errors import NotFound, RecordingFailed, ResourceError
from .persistence.recorder import BankRecorder

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Bank(Generic[T]):
    """A named, lazily loaded collection of resources of one content type.

    The bank's data is read through its recorder on ``initialize()`` and
    dropped on ``uninitialize()``. The bank object itself survives both, so it
    can be initialized again later.
    """

    def __init__(self, name: str, content_type: Hashable, recorder: BankRecorder) -> None:
        if not name:
            raise ValueError("Bank name must be a non-empty string")
        self._name = name
        self._content_type = content_type
        self._recorder = recorder
        self._contents: Dict[str, T] = {}
        self._initialized = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def key(self) -> str:
        """Lower-cased name used for lookups and phase membership."""
        return self._name.lower()

    @property
    def content_type(self) -> Hashable:
        return self._content_type

    @property
    def initialized(self) -> bool:
        return self._initialized

    def get(self, resource_name: str) -> T:
        try:
            return self._contents[resource_name]
        except KeyError as exc:
            raise NotFound(
                f"Bank {self._name!r} ({type_key(self._content_type)}) has no resource {resource_name!r}"
            ) from exc

    def put(self, resource_name: str, resource: T) -> None:
        self._contents[resource_name] = resource

    def resource_names(self) -> List[str]:
        return list(self._contents)

    def list_contents(self) -> List[T]:
        return list(self._contents.values())

    def initialize(self) -> None:
        """Read the bank data, keeping any resources put before initialization.

        Raises RecordingFailed if the read fails, in which case the bank stays
        uninitialized.
        """
        if self._initialized:
            return
        try:
            entries = list(self._recorder.read_bank(self._name, self._content_type))
        except ResourceError:
            raise
        except Exception as exc:  # noqa: BLE001 broad but wrapped
            logger.exception("Failed to read bank %s/%s", type_key(self._content_type), self._name)
            raise RecordingFailed(f"Failed to read bank {self._name!r}: {exc}") from exc
        for resource_name, resource in entries:
            self._contents.setdefault(resource_name, resource)
        self._initialized = True
        logger.debug("Initialized bank %s/%s (%d resources)", type_key(self._content_type), self._name, len(self._contents))

    def uninitialize(self) -> None:
        """Clear the bank. Unsaved changes are lost."""
        if not self._initialized:
            return
        self._contents.clear()
        self._initialized = False
        logger.debug("Uninitialized bank %s/%s", type_key(self._content_type), self._name)

    def save(self) -> None:
        try:
            self._recorder.write_bank(self._name, self._content_type, list(self._contents.items()))
        except ResourceError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to save bank %s/%s", type_key(self._content_type), self._name)
            raise RecordingFailed(f"Failed to save bank {self._name!r}: {exc}") from exc

    def __contains__(self, resource_name: object) -> bool:
        return resource_name in self._contents

    def __len__(self) -> int:
        return len(self._contents)

    def __repr__(self) -> str:
        state = "initialized" if self._initialized else "uninitialized"
        return f"Bank({self._name!r}, {type_key(self._content_type)}, {state}, {len(self._contents)} resources)"
