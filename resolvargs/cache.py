import threading
from collections.abc import Callable, Iterator

from resolvargs.types import ParameterSignature


class SignatureCache:
    def __init__(self) -> None:
        self._signatures: dict[str, ParameterSignature] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> ParameterSignature | None:
        with self._lock:
            return self._signatures.get(key)

    def set(self, key: str, signature: ParameterSignature) -> None:
        with self._lock:
            self._signatures[key] = signature

    def get_or_extract(
        self,
        key: str,
        extract: Callable[[], ParameterSignature],
    ) -> tuple[ParameterSignature, bool]:
        cached = self.get(key)
        if cached is not None:
            return cached, True
        signature = extract()
        self.set(key, signature)
        return signature, False

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._signatures

    def __len__(self) -> int:
        with self._lock:
            return len(self._signatures)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._signatures))


default_signature_cache = SignatureCache()
