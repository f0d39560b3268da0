from typing import Any, overload

from peritype import TWrap, wrap_type
from peritype.collections import TypeBag, TypeMap

from resolvargs.errors import ServiceNotFoundError
from resolvargs.types import LookupKey


class ServiceCollection:
    def __init__(self) -> None:
        self._registered_types = TypeBag()
        self._typed_values = TypeMap[Any, Any]()
        self._named_values: dict[str, Any] = {}

    @overload
    def add[T](self, key: type[T] | TWrap[T], value: T, /) -> None: ...
    @overload
    def add(self, key: str, value: Any, /) -> None: ...
    def add(self, key: Any, value: Any, /) -> None:
        if isinstance(key, str):
            if key in self._named_values:
                raise ValueError(f"A value named '{key}' is already registered.")
            self._named_values[key] = value
            return
        twrap = self._wrap(key)
        if twrap in self._registered_types:
            raise ValueError(f"A value for type {twrap} is already registered.")
        self._registered_types.add(twrap)
        self._typed_values.add(twrap, value)

    def is_registered(self, key: LookupKey | TWrap[Any]) -> bool:
        if isinstance(key, str):
            return key in self._named_values
        return self._wrap(key) in self._registered_types

    def has(self, key: LookupKey, /) -> bool:
        return self.is_registered(key)

    def get(self, key: LookupKey, /) -> Any:
        if not self.is_registered(key):
            raise ServiceNotFoundError(str(key))
        if isinstance(key, str):
            return self._named_values[key]
        return self._typed_values[self._wrap(key)]

    @staticmethod
    def _wrap(key: Any) -> TWrap[Any]:
        if isinstance(key, TWrap):
            return key
        return wrap_type(key)
