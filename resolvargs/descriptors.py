import inspect
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from types import BuiltinFunctionType, FunctionType, MethodType
from typing import Any

from resolvargs.errors import DescriptorError
from resolvargs.utils import import_object, is_anonymous, qualified_name

INVOKE_MEMBER = "__call__"
INIT_MEMBER = "__init__"


@dataclass(frozen=True, slots=True)
class MethodDescriptor:
    owner: Any
    member: str

    @property
    def owner_type(self) -> Any:
        if isinstance(self.owner, type) or isinstance(self.owner, str):
            return self.owner
        return type(self.owner)

    def __str__(self) -> str:
        owner = self.owner_type
        name = owner if isinstance(owner, str) else qualified_name(owner)
        return f"{name}::{self.member}"


@dataclass(frozen=True, slots=True)
class FunctionDescriptor:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class AnonymousDescriptor:
    func: Callable[..., Any]

    def __str__(self) -> str:
        return getattr(self.func, "__qualname__", repr(self.func))


type CallableDescriptor = MethodDescriptor | FunctionDescriptor | AnonymousDescriptor


def to_descriptor(target: Any) -> CallableDescriptor:
    match target:
        case MethodDescriptor() | FunctionDescriptor() | AnonymousDescriptor():
            return target
        case (owner, member):
            if not isinstance(member, str) or not member:
                raise DescriptorError(repr(target), "member name must be a non-empty string")
            return MethodDescriptor(owner, member)
        case tuple() | list():
            raise DescriptorError(repr(target), "expected an (owner, member) pair")
        case str():
            if not target:
                raise DescriptorError(repr(target), "function name is empty")
            return FunctionDescriptor(target)
        case MethodType():
            return MethodDescriptor(target.__self__, target.__name__)
        case type():
            if is_anonymous(target):
                return AnonymousDescriptor(target)
            return MethodDescriptor(target, INIT_MEMBER)
        case partial():
            return AnonymousDescriptor(target)
        case BuiltinFunctionType() if not inspect.ismodule(target.__self__):
            return MethodDescriptor(target.__self__, target.__name__)
        case FunctionType() | BuiltinFunctionType():
            if is_anonymous(target):
                return AnonymousDescriptor(target)
            return FunctionDescriptor(qualified_name(target))
        case _ if callable(target) and not inspect.isroutine(target):
            return MethodDescriptor(target, INVOKE_MEMBER)
        case _:
            raise DescriptorError(repr(target), "no invocation entry point")


def resolve_owner(descriptor: MethodDescriptor) -> MethodDescriptor:
    if not isinstance(descriptor.owner, str):
        return descriptor
    try:
        owner = import_object(descriptor.owner)
    except LookupError:
        raise DescriptorError(str(descriptor), f"'{descriptor.owner}' does not name a known class") from None
    if not isinstance(owner, type):
        raise DescriptorError(str(descriptor), f"'{descriptor.owner}' is not a class")
    return MethodDescriptor(owner, descriptor.member)
