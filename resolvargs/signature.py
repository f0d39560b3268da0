import inspect
import logging
from collections.abc import Callable
from dataclasses import replace
from functools import partial
from types import FunctionType, NoneType, UnionType
from typing import Annotated, Any, ForwardRef, Protocol, Union, get_args, get_origin

from peritype import FWrap, TWrap, wrap_func, wrap_type

from resolvargs.descriptors import INIT_MEMBER
from resolvargs.errors import DescriptorError
from resolvargs.types import ParameterSignature, ParameterSpec
from resolvargs.utils import import_object, qualified_name

logger = logging.getLogger(__name__)

_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class SignatureProvider(Protocol):
    def method_signature(self, owner: Any, member: str) -> ParameterSignature: ...

    def function_signature(self, name: str) -> ParameterSignature: ...

    def callable_signature(self, func: Callable[..., Any]) -> ParameterSignature: ...


class ReflectionSignatureProvider:
    def method_signature(self, owner: Any, member: str) -> ParameterSignature:
        label = f"{qualified_name(owner if isinstance(owner, type) else type(owner))}::{member}"
        if member == INIT_MEMBER and isinstance(owner, type):
            return self._constructor_signature(owner, label)
        if not hasattr(owner, member):
            raise DescriptorError(label, f"member '{member}' does not exist")
        func = getattr(owner, member)
        if not callable(func):
            raise DescriptorError(label, f"member '{member}' is not callable")
        # Plain functions looked up on a class still expect the instance first.
        skip_first = isinstance(owner, type) and isinstance(inspect.getattr_static(owner, member), FunctionType)
        return self._function_signature(func, label, skip_first=skip_first)

    def function_signature(self, name: str) -> ParameterSignature:
        try:
            func = import_object(name)
        except LookupError:
            raise DescriptorError(name, "no such function") from None
        if not inspect.isroutine(func):
            raise DescriptorError(name, "not a function")
        return self._function_signature(func, name)

    def callable_signature(self, func: Callable[..., Any]) -> ParameterSignature:
        label = getattr(func, "__qualname__", repr(func))
        if isinstance(func, partial):
            return _bind_partial(self.callable_signature(func.func), func)
        if isinstance(func, type):
            return self._constructor_signature(func, label)
        return self._function_signature(func, label)

    def _constructor_signature(self, cls: type[Any], label: str) -> ParameterSignature:
        if cls.__init__ is object.__init__ and cls.__new__ is object.__new__:
            return ()
        try:
            twrap = wrap_type(cls)
            signature = twrap.signature
        except (TypeError, ValueError) as e:
            raise DescriptorError(label, f"no signature available ({e})") from e
        return _to_signature(signature, twrap.init, label)

    def _function_signature(
        self,
        func: Callable[..., Any],
        label: str,
        *,
        skip_first: bool = False,
    ) -> ParameterSignature:
        try:
            fwrap = wrap_func(func)
            signature = fwrap.signature
        except (TypeError, ValueError) as e:
            raise DescriptorError(label, f"no signature available ({e})") from e
        return _to_signature(signature, fwrap, label, skip_first=skip_first)


def _to_signature(
    signature: inspect.Signature,
    fwrap: FWrap[..., Any],
    label: str,
    *,
    skip_first: bool = False,
) -> ParameterSignature:
    parameters = list(signature.parameters.values())
    if skip_first and parameters:
        parameters = parameters[1:]
    hints = _signature_hints(fwrap, label)
    logger.debug("Extracted %d parameter(s) from '%s'", len(parameters), label)
    return tuple(
        _to_spec(param, hints.get(param.name))
        for param in parameters
        if param.kind not in _VARIADIC_KINDS
    )


def _signature_hints(fwrap: FWrap[..., Any], label: str) -> dict[str, TWrap[Any]]:
    # Annotations peritype cannot wrap are kept as declared on the signature.
    try:
        return fwrap.get_signature_hints(belongs_to=None)
    except Exception as e:
        logger.debug("No type hints for '%s': %s", label, e)
        return {}


def _bind_partial(signature: ParameterSignature, func: partial[Any]) -> ParameterSignature:
    bound_positionals = len(func.args)
    specs: list[ParameterSpec] = []
    keyword_bound = False
    for spec in signature:
        if spec.kind in _POSITIONAL_KINDS and bound_positionals > 0:
            bound_positionals -= 1
            continue
        if spec.name in func.keywords:
            keyword_bound = True
            spec = replace(
                spec,
                kind=inspect.Parameter.KEYWORD_ONLY,
                has_default=True,
                default=func.keywords[spec.name],
            )
        elif keyword_bound and spec.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD:
            spec = replace(spec, kind=inspect.Parameter.KEYWORD_ONLY)
        specs.append(spec)
    return tuple(specs)


def _describe(annotation: Any) -> tuple[Any, bool]:
    if annotation is inspect.Parameter.empty or annotation is Any or annotation is object:
        return None, False
    if annotation is None or annotation is NoneType:
        return None, True
    origin = get_origin(annotation)
    if origin is Annotated:
        return _describe(get_args(annotation)[0])
    if origin is Union or origin is UnionType:
        args = get_args(annotation)
        members = [arg for arg in args if arg is not NoneType]
        nullable = len(members) != len(args)
        if len(members) == 1:
            declared, inner_nullable = _describe(members[0])
            return declared, nullable or inner_nullable
        return None, nullable
    return annotation, False


def _describe_hint(hint: TWrap[Any]) -> tuple[Any, bool]:
    nodes = list(hint.nodes)
    if len(nodes) == 1:
        return _describe(hint.inner_type)
    members = [node for node in nodes if node.inner_type is not NoneType]
    nullable = len(members) != len(nodes)
    if len(members) == 1:
        declared, _ = _describe(members[0].inner_type)
        return declared, nullable
    return None, nullable


def _to_spec(param: inspect.Parameter, hint: TWrap[Any] | None) -> ParameterSpec:
    declared, accepts_null = _describe(param.annotation)
    # Postponed annotations are only strings on the signature, peritype evaluates them.
    if isinstance(declared, str | ForwardRef) and hint is not None:
        declared, hint_nullable = _describe_hint(hint)
        accepts_null = accepts_null or hint_nullable
    has_default = param.default is not inspect.Parameter.empty
    return ParameterSpec(
        name=param.name,
        kind=param.kind,
        annotation=declared,
        has_default=has_default,
        default=param.default if has_default else None,
        accepts_null=accepts_null,
    )
