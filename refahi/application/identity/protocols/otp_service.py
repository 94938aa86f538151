from typing import Protocol


class OtpServiceProtocol(Protocol):
    def hash_code(self, code: str) -> str: ...

    def verify_code(self, code: str, code_hash: str) -> bool: ...
