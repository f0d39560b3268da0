import os.path
from typing import Any

import pytest

from resolvargs import (
    AnonymousDescriptor,
    ArgumentResolver,
    DescriptorError,
    FunctionDescriptor,
    MethodDescriptor,
    ServiceCollection,
    SignatureCache,
    to_descriptor,
)


class Greeter:
    def __init__(self, greeting: str = "Hello") -> None:
        self.greeting = greeting

    def greet(self, name: str) -> str:
        return f"{self.greeting}, {name}!"

    @staticmethod
    def shout(text: str, times: int = 1) -> str:
        return text.upper() * times

    @classmethod
    def create(cls, greeting: str) -> "Greeter":
        return cls(greeting)

    def __call__(self, name: str) -> str:
        return self.greet(name)


class Empty:
    pass


class Mandatory:
    def __init__(self, mandatory: str) -> None:
        self.mandatory = mandatory


def ping() -> str:
    return "pong"


def describe(count: int, label: str = "none") -> str:
    return f"{label}: {count}"


def make_resolver(**values: Any) -> ArgumentResolver:
    lookup = ServiceCollection()
    for key, value in values.items():
        lookup.add(key, value)
    return ArgumentResolver(lookup, cache=SignatureCache())


def test_descriptor_from_pair() -> None:
    assert to_descriptor((Greeter, "greet")) == MethodDescriptor(Greeter, "greet")


def test_descriptor_from_string() -> None:
    assert to_descriptor("os.path.join") == FunctionDescriptor("os.path.join")


def test_descriptor_from_bound_method() -> None:
    greeter = Greeter()
    assert to_descriptor(greeter.greet) == MethodDescriptor(greeter, "greet")


def test_descriptor_from_class() -> None:
    assert to_descriptor(Greeter) == MethodDescriptor(Greeter, "__init__")


def test_descriptor_from_module_function() -> None:
    assert to_descriptor(describe) == FunctionDescriptor(f"{__name__}.describe")


def test_descriptor_from_invokable() -> None:
    greeter = Greeter()
    assert to_descriptor(greeter) == MethodDescriptor(greeter, "__call__")


def test_descriptor_from_lambda() -> None:
    func = lambda value: value  # noqa: E731
    assert to_descriptor(func) == AnonymousDescriptor(func)


def test_descriptor_from_closure() -> None:
    def closure(value: int) -> int:
        return value

    assert to_descriptor(closure) == AnonymousDescriptor(closure)


def test_descriptor_is_kept() -> None:
    descriptor = FunctionDescriptor("os.path.join")
    assert to_descriptor(descriptor) is descriptor


def test_descriptor_labels() -> None:
    assert str(MethodDescriptor(Greeter, "greet")) == f"{__name__}.Greeter::greet"
    assert str(MethodDescriptor(Greeter(), "greet")) == f"{__name__}.Greeter::greet"
    assert str(MethodDescriptor("some.module.Class", "run")) == "some.module.Class::run"


@pytest.mark.parametrize(
    "target",
    [
        (Greeter, ""),
        (Greeter, 42),
        (Greeter, None),
        (Greeter,),
        (Greeter, "greet", "extra"),
        "",
        42,
        object(),
    ],
)
def test_fail_malformed_descriptor(target: Any) -> None:
    with pytest.raises(DescriptorError) as exc_info:
        to_descriptor(target)

    assert exc_info.value.code == "resolvargs.descriptor.invalid"


def test_resolve_method() -> None:
    resolver = make_resolver()

    assert resolver.resolve((Greeter(), "greet"), {"name": "World"}) == ["World"]


def test_resolve_static_method_from_class() -> None:
    resolver = make_resolver(text="hey")

    assert resolver.resolve((Greeter, "shout")) == ["hey", 1]


def test_resolve_class_method_from_class() -> None:
    resolver = make_resolver(greeting="Hi")

    assert resolver.resolve((Greeter, "create")) == ["Hi"]


def test_resolve_instance_method_from_class_skips_self() -> None:
    resolver = make_resolver(name="World")

    assert resolver.resolve((Greeter, "greet")) == ["World"]


def test_resolve_constructor() -> None:
    resolver = make_resolver()

    assert resolver.resolve((Greeter, "__init__")) == ["Hello"]
    assert resolver.resolve(Greeter, {"greeting": "Hi"}) == ["Hi"]


def test_resolve_constructor_by_class_name() -> None:
    resolver = make_resolver(mandatory="value")

    assert resolver.resolve((f"{__name__}.Mandatory", "__init__")) == ["value"]


def test_resolve_missing_initializer() -> None:
    resolver = make_resolver()

    assert resolver.resolve((Empty, "__init__")) == []


def test_resolve_invokable_object() -> None:
    resolver = make_resolver()

    assert resolver.resolve(Greeter(), {"name": "Some string"}) == ["Some string"]


def test_resolve_function_by_name() -> None:
    resolver = make_resolver(count=42)

    assert resolver.resolve(f"{__name__}.describe") == [42, "none"]


def test_resolve_library_function_by_name() -> None:
    resolver = make_resolver()

    assert resolver.resolve("os.path.join", {"a": "/tmp"}) == ["/tmp"]
    assert resolver.resolve(os.path.join, {"a": "/var"}) == ["/var"]


def test_resolve_function_without_parameters() -> None:
    resolver = make_resolver()

    assert resolver.resolve(f"{__name__}.ping") == []


def test_fail_unknown_class_name() -> None:
    resolver = make_resolver()

    with pytest.raises(DescriptorError):
        resolver.resolve(("non.existent.Class", "__init__"))


def test_fail_class_name_naming_a_function() -> None:
    resolver = make_resolver()

    with pytest.raises(DescriptorError):
        resolver.resolve(("os.path.join", "__init__"))


def test_fail_nonexistent_method() -> None:
    resolver = make_resolver()

    with pytest.raises(DescriptorError) as exc_info:
        resolver.resolve((Greeter(), "non_existent"))

    assert exc_info.value.target == f"{__name__}.Greeter::non_existent"


def test_fail_non_callable_member() -> None:
    resolver = make_resolver()

    with pytest.raises(DescriptorError):
        resolver.resolve((Greeter(), "greeting"))


def test_fail_nonexistent_function() -> None:
    resolver = make_resolver()

    with pytest.raises(DescriptorError):
        resolver.resolve("non_existing_function")

    with pytest.raises(DescriptorError):
        resolver.resolve("os.path.non_existing_function")


def test_fail_name_of_non_function() -> None:
    resolver = make_resolver()

    with pytest.raises(DescriptorError):
        resolver.resolve("os.sep")


def test_call_method_by_pair() -> None:
    resolver = make_resolver(name="World")

    assert resolver.call((Greeter(), "greet")) == "Hello, World!"


def test_call_static_method_by_pair() -> None:
    resolver = make_resolver()

    assert resolver.call((Greeter, "shout"), {"text": "hey", "times": 2}) == "HEYHEY"


def test_call_function_by_name() -> None:
    resolver = make_resolver(count=42)

    assert resolver.call(f"{__name__}.describe", {"label": "answer"}) == "answer: 42"


def test_fail_call_instance_method_without_instance() -> None:
    resolver = make_resolver(name="World")

    with pytest.raises(DescriptorError):
        resolver.call((Greeter, "greet"))
