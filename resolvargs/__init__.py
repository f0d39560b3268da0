from resolvargs.types import (
    DependencyLookup as DependencyLookup,
    KnownValues as KnownValues,
    LookupKey as LookupKey,
    ParameterSignature as ParameterSignature,
    ParameterSpec as ParameterSpec,
    ResolverOptions as ResolverOptions,
)
from resolvargs.errors import (
    ResolverError as ResolverError,
    DescriptorError as DescriptorError,
    ParameterError as ParameterError,
    InvalidDependencyTypeError as InvalidDependencyTypeError,
    InstantiationError as InstantiationError,
    UnresolvedParameterError as UnresolvedParameterError,
    ServiceNotFoundError as ServiceNotFoundError,
)
from resolvargs.descriptors import (
    CallableDescriptor as CallableDescriptor,
    MethodDescriptor as MethodDescriptor,
    FunctionDescriptor as FunctionDescriptor,
    AnonymousDescriptor as AnonymousDescriptor,
    to_descriptor as to_descriptor,
)
from resolvargs.cache import (
    SignatureCache as SignatureCache,
    default_signature_cache as default_signature_cache,
)
from resolvargs.signature import (
    SignatureProvider as SignatureProvider,
    ReflectionSignatureProvider as ReflectionSignatureProvider,
)
from resolvargs.collection import ServiceCollection as ServiceCollection
from resolvargs.resolver import (
    ArgumentResolver as ArgumentResolver,
    ArgumentResolverFactory as ArgumentResolverFactory,
)
