"""
Typed configuration fields for mapconfig.

A :class:`Field` holds one scalar option of a section schema. Its state is
one of three tagged values:

* ``UNSET`` - nothing was read yet;
* :class:`Loaded` - a typed value was read;
* :class:`Invalid` - a value was present but could not be converted.

Override precedence between a concrete section, its global template and the
built-in default is the pure function :func:`resolve`; fields only ever move
from ``UNSET`` to one of the other two states.
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Optional, Type, TypeVar, Union, cast

from .document import SUPPORTED_KINDS, ConfigSection
from .types import ValidationList

T = TypeVar("T")


class _Unset:
    """Marker state of a field that has not been loaded."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()

# Marker for "this field has no built-in default"
NO_DEFAULT: Any = object()


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """State of a field holding a converted value."""
    value: T


@dataclass(frozen=True)
class Invalid:
    """State of a field whose raw value failed conversion."""
    raw: str
    reason: str


FieldState = Union[_Unset, Loaded[Any], Invalid]


def resolve(*candidates: FieldState) -> FieldState:
    """Return the first candidate state that is set.

    ``resolve(local, global_, default)`` gives per-section values precedence
    over the global template, and the template over the built-in default.
    """
    for candidate in candidates:
        if candidate is not UNSET:
            return candidate
    return UNSET


def read_state(section: ConfigSection, key: str, kind: Type[T]) -> FieldState:
    """Read ``key`` from ``section`` as a field state, never raising."""
    if not section.has(key):
        return UNSET
    try:
        return Loaded(section.get(key, kind))
    except ValueError as e:
        return Invalid(section.get_raw(key), str(e))


class Field(Generic[T]):
    """Lazily loaded, validated configuration value.

    A field is populated at most once over its lifetime: after the first
    successful load every further ``load``/``inherit`` call is a no-op.
    Loading never raises; problems surface through return values and the
    validation list passed to :meth:`require`.
    """

    def __init__(self, kind: Type[T], default: Any = NO_DEFAULT):
        if kind not in SUPPORTED_KINDS:
            raise TypeError(f"Unsupported field type: {kind!r}")
        self.kind = kind
        self._default = default
        self._state: FieldState = UNSET

    def __repr__(self) -> str:
        return f"Field({self.kind.__name__}, state={self._state!r})"

    @property
    def state(self) -> FieldState:
        return self._state

    @property
    def has_default(self) -> bool:
        return self._default is not NO_DEFAULT

    @property
    def default(self) -> Optional[T]:
        return None if self._default is NO_DEFAULT else cast(T, self._default)

    def _default_state(self) -> FieldState:
        return Loaded(self._default) if self.has_default else UNSET

    @property
    def is_loaded(self) -> bool:
        return self._state is not UNSET

    @property
    def is_valid(self) -> bool:
        return isinstance(self._state, Loaded)

    @property
    def error(self) -> Optional[str]:
        """Conversion error of an invalid value, if any."""
        if isinstance(self._state, Invalid):
            return self._state.reason
        return None

    @property
    def value(self) -> Optional[T]:
        """The loaded value; only meaningful if the field is valid.

        Falls back to the built-in default (or None) otherwise.
        """
        if isinstance(self._state, Loaded):
            return cast(T, self._state.value)
        return self.default

    def load(self, section: ConfigSection, key: str, default: Any = NO_DEFAULT) -> bool:
        """Load the field from a section.

        Without ``default`` the field stays unloaded when the section does
        not set ``key``. With ``default`` the field is always loaded, using
        the default for an absent key.

        Args:
            section: Section to read from
            key: Option name
            default: Value for an absent key

        Returns:
            True if the field is loaded afterwards
        """
        if self.is_loaded:
            return True
        fallback = UNSET if default is NO_DEFAULT else Loaded(default)
        self._state = resolve(read_state(section, key, self.kind), fallback)
        return self.is_loaded

    def inherit(self, other: "Field[T]") -> bool:
        """Fill an unloaded field from another field, then the built-in default.

        Returns:
            True if the field is loaded afterwards
        """
        if self.is_loaded:
            return True
        self._state = resolve(other.state, self._default_state())
        return self.is_loaded

    def require(self, validation: ValidationList, message: str) -> bool:
        """Report ``message`` as an error if the field was never loaded."""
        if not self.is_loaded:
            validation.error(message)
            return False
        return True

    def validate_one_of(
        self, validation: ValidationList, message: str, values: Iterable[T]
    ) -> bool:
        """Check that the value is one of ``values``.

        Unlike :meth:`require` this does not report anything: callers add
        their own message when the check fails. An unloaded or invalid
        field never passes.
        """
        if not isinstance(self._state, Loaded):
            return False
        return self._state.value in list(values)
