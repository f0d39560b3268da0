import builtins
import importlib
import inspect
from collections.abc import Callable, Iterable
from typing import Any, Literal, TypeGuard, get_origin

BUILTIN_KINDS: frozenset[Any] = frozenset(
    {int, float, complex, bool, str, bytes, bytearray, list, tuple, dict, set, frozenset, Callable, Iterable, Literal}
)


def is_type_like(obj: Any) -> TypeGuard[type[Any]]:
    return isinstance(obj, type) or isinstance(get_origin(obj), type)


def is_builtin_kind(annotation: Any) -> bool:
    origin = get_origin(annotation)
    if origin is not None:
        return origin in BUILTIN_KINDS
    return isinstance(annotation, type) and annotation in BUILTIN_KINDS


def is_protocol(cls: type[Any]) -> bool:
    return isinstance(cls, type) and getattr(cls, "_is_protocol", False) is True


def is_interface(cls: type[Any]) -> bool:
    return inspect.isabstract(cls) or is_protocol(cls)


def is_anonymous(obj: Any) -> bool:
    qualname: str = getattr(obj, "__qualname__", "")
    return "<lambda>" in qualname or "<locals>" in qualname


def qualified_name(obj: Any) -> str:
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)
    if module is None or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def import_object(path: str) -> Any:
    if "." not in path:
        if hasattr(builtins, path):
            return getattr(builtins, path)
        raise LookupError(path)
    parts = path.split(".")
    # Import the longest importable module prefix, then walk attributes.
    for split in range(len(parts) - 1, 0, -1):
        module_path = ".".join(parts[:split])
        attr_path = ".".join(parts[split:])
        try:
            obj: Any = importlib.import_module(module_path)
        except ImportError:
            continue
        for attr in attr_path.split("."):
            if not hasattr(obj, attr):
                raise LookupError(path)
            obj = getattr(obj, attr)
        return obj
    raise LookupError(path)
