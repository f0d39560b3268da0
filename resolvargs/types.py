import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from resolvargs.utils import is_builtin_kind

type LookupKey = type[Any] | str
type KnownValues = Mapping[LookupKey, Any]


@runtime_checkable
class DependencyLookup(Protocol):
    def has(self, key: LookupKey, /) -> bool: ...

    def get(self, key: LookupKey, /) -> Any: ...


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    name: str
    kind: inspect._ParameterKind
    annotation: Any = None
    has_default: bool = False
    default: Any = None
    accepts_null: bool = False

    @property
    def is_typed(self) -> bool:
        return self.annotation is not None and not is_builtin_kind(self.annotation)

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is inspect.Parameter.KEYWORD_ONLY


type ParameterSignature = tuple[ParameterSpec, ...]


@dataclass(frozen=True, slots=True)
class ResolverOptions:
    inject_lookup: bool = True
    instantiate_fallback: bool = True
