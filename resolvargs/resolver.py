import inspect
import logging
from collections.abc import Callable
from types import FunctionType
from typing import Any, get_origin

from peritype import wrap_type

from resolvargs.cache import SignatureCache, default_signature_cache
from resolvargs.descriptors import (
    INIT_MEMBER,
    AnonymousDescriptor,
    CallableDescriptor,
    FunctionDescriptor,
    MethodDescriptor,
    resolve_owner,
    to_descriptor,
)
from resolvargs.errors import (
    DescriptorError,
    InstantiationError,
    InvalidDependencyTypeError,
    UnresolvedParameterError,
)
from resolvargs.signature import ReflectionSignatureProvider, SignatureProvider
from resolvargs.types import (
    DependencyLookup,
    KnownValues,
    ParameterSignature,
    ParameterSpec,
    ResolverOptions,
)
from resolvargs.utils import import_object, is_anonymous, is_interface, is_type_like

logger = logging.getLogger(__name__)


class ArgumentResolver:
    def __init__(
        self,
        lookup: DependencyLookup,
        *,
        options: ResolverOptions | None = None,
        cache: SignatureCache | None = None,
        provider: SignatureProvider | None = None,
    ) -> None:
        self._lookup = lookup
        self._options = options if options is not None else ResolverOptions()
        self._cache = cache if cache is not None else default_signature_cache
        self._provider = provider if provider is not None else ReflectionSignatureProvider()

    @property
    def lookup(self) -> DependencyLookup:
        return self._lookup

    @property
    def options(self) -> ResolverOptions:
        return self._options

    @property
    def cache(self) -> SignatureCache:
        return self._cache

    def resolve(
        self,
        target: Any,
        known_values: KnownValues | None = None,
        lookup: DependencyLookup | None = None,
    ) -> list[Any]:
        descriptor = to_descriptor(target)
        signature = self.get_signature(descriptor)
        return self.resolve_arguments(
            signature,
            known_values if known_values is not None else {},
            lookup if lookup is not None else self._lookup,
            target=str(descriptor),
        )

    def call(
        self,
        target: Any,
        known_values: KnownValues | None = None,
        lookup: DependencyLookup | None = None,
    ) -> Any:
        descriptor = to_descriptor(target)
        if isinstance(descriptor, MethodDescriptor):
            descriptor = resolve_owner(descriptor)
        signature = self.get_signature(descriptor)
        func = self._get_callable(descriptor)
        values = self.resolve_arguments(
            signature,
            known_values if known_values is not None else {},
            lookup if lookup is not None else self._lookup,
            target=str(descriptor),
        )
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for spec, value in zip(signature, values, strict=True):
            if spec.is_keyword_only:
                kwargs[spec.name] = value
            else:
                args.append(value)
        return func(*args, **kwargs)

    def get_signature(self, descriptor: CallableDescriptor) -> ParameterSignature:
        match descriptor:
            case MethodDescriptor():
                descriptor = resolve_owner(descriptor)
                owner, member = descriptor.owner, descriptor.member
                if self._is_transient_member(owner, member):
                    return self._provider.method_signature(owner, member)
                return self._cached(str(descriptor), lambda: self._provider.method_signature(owner, member))
            case FunctionDescriptor():
                name = descriptor.name
                return self._cached(name, lambda: self._provider.function_signature(name))
            case AnonymousDescriptor():
                return self._provider.callable_signature(descriptor.func)

    def get_cached_signature(self, key: str) -> ParameterSignature | None:
        return self._cache.get(key)

    def resolve_arguments(
        self,
        signature: ParameterSignature,
        known_values: KnownValues,
        lookup: DependencyLookup,
        *,
        target: str = "<callable>",
    ) -> list[Any]:
        if not signature:
            return []
        arguments: list[Any] = []
        for spec in signature:
            if spec.is_typed:
                arguments.append(self._resolve_typed(spec, known_values, lookup, target))
            else:
                arguments.append(self._resolve_named(spec, known_values, lookup, target))
        return arguments

    def _resolve_typed(
        self,
        spec: ParameterSpec,
        known_values: KnownValues,
        lookup: DependencyLookup,
        target: str,
    ) -> Any:
        declared = spec.annotation
        if not is_type_like(declared):
            raise InvalidDependencyTypeError(spec.name, target, declared)
        if declared in known_values:
            return known_values[declared]
        if self._is_lookup_type(declared, lookup):
            logger.debug("Injecting the lookup service into parameter '%s' of '%s'", spec.name, target)
            return lookup
        if lookup.has(declared):
            return lookup.get(declared)
        if spec.has_default:
            return spec.default
        if spec.accepts_null:
            return None
        concrete = get_origin(declared) or declared
        if self._options.instantiate_fallback and not is_interface(concrete):
            return self._instantiate(spec, declared, target)
        raise UnresolvedParameterError(spec.name, target)

    def _resolve_named(
        self,
        spec: ParameterSpec,
        known_values: KnownValues,
        lookup: DependencyLookup,
        target: str,
    ) -> Any:
        if spec.name in known_values:
            return known_values[spec.name]
        if lookup.has(spec.name):
            return lookup.get(spec.name)
        if spec.has_default:
            return spec.default
        if spec.accepts_null:
            return None
        raise UnresolvedParameterError(spec.name, target)

    def _is_lookup_type(self, declared: Any, lookup: DependencyLookup) -> bool:
        if not self._options.inject_lookup:
            return False
        return declared is DependencyLookup or declared is type(lookup)

    def _instantiate(self, spec: ParameterSpec, declared: Any, target: str) -> Any:
        logger.debug("Instantiating %r for parameter '%s' of '%s'", declared, spec.name, target)
        try:
            return wrap_type(declared).instantiate()
        except Exception as e:
            raise InstantiationError(spec.name, target, declared) from e

    def _cached(self, key: str, extract: Callable[[], ParameterSignature]) -> ParameterSignature:
        signature, hit = self._cache.get_or_extract(key, extract)
        if not hit:
            logger.debug("Cached signature of '%s'", key)
        return signature

    @staticmethod
    def _is_transient_member(owner: Any, member: str) -> bool:
        owner_type = owner if isinstance(owner, type) else type(owner)
        if is_anonymous(owner_type):
            return True
        # Callables stored on the instance differ from one instance to the next.
        return not isinstance(owner, type) and member in getattr(owner, "__dict__", {})

    @staticmethod
    def _get_callable(descriptor: CallableDescriptor) -> Callable[..., Any]:
        match descriptor:
            case MethodDescriptor(owner=owner, member=member):
                if isinstance(owner, type):
                    if member == INIT_MEMBER:
                        return owner
                    if isinstance(inspect.getattr_static(owner, member, None), FunctionType):
                        raise DescriptorError(str(descriptor), "an instance method needs an instance to be called")
                if not hasattr(owner, member):
                    raise DescriptorError(str(descriptor), f"member '{member}' does not exist")
                return getattr(owner, member)
            case FunctionDescriptor(name=name):
                try:
                    return import_object(name)
                except LookupError:
                    raise DescriptorError(name, "no such function") from None
            case AnonymousDescriptor(func=func):
                return func


class ArgumentResolverFactory:
    def __init__(
        self,
        *,
        options: ResolverOptions | None = None,
        cache: SignatureCache | None = None,
        provider: SignatureProvider | None = None,
    ) -> None:
        self._options = options
        self._cache = cache
        self._provider = provider

    def __call__(self, lookup: DependencyLookup) -> ArgumentResolver:
        return ArgumentResolver(lookup, options=self._options, cache=self._cache, provider=self._provider)
