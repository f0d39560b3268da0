from typing import Any


class ResolverError(Exception):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message


class DescriptorError(ResolverError):
    def __init__(self, target: str, reason: str) -> None:
        super().__init__(
            "resolvargs.descriptor.invalid",
            f"Cannot extract a signature from {target}: {reason}.",
        )
        self.target = target
        self.reason = reason


class ParameterError(ResolverError):
    def __init__(self, code: str, message: str, parameter: str, target: str) -> None:
        super().__init__(code, message)
        self.parameter = parameter
        self.target = target


class InvalidDependencyTypeError(ParameterError):
    def __init__(self, parameter: str, target: str, annotation: Any) -> None:
        super().__init__(
            "resolvargs.dependency.invalid_type",
            f"Annotation {annotation!r} of parameter '{parameter}' of '{target}' is neither a class nor an interface.",
            parameter,
            target,
        )
        self.annotation = annotation


class InstantiationError(ParameterError):
    def __init__(self, parameter: str, target: str, annotation: Any) -> None:
        name = getattr(annotation, "__qualname__", repr(annotation))
        super().__init__(
            "resolvargs.dependency.instantiation_failed",
            f"Unable to instantiate '{name}' for parameter '{parameter}' of '{target}'.",
            parameter,
            target,
        )
        self.annotation = annotation


class UnresolvedParameterError(ParameterError):
    def __init__(self, parameter: str, target: str) -> None:
        super().__init__(
            "resolvargs.parameter.unresolved",
            f"Unable to resolve parameter '{parameter}' of '{target}'.",
            parameter,
            target,
        )


class ServiceNotFoundError(ResolverError):
    def __init__(self, key: str) -> None:
        super().__init__(
            "resolvargs.service.not_found",
            f"Service for key '{key}' not found.",
        )
        self.key = key
