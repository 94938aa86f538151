from refahi.infrastructure.identity.services import otp_service


class OtpServiceAdapter:
    """Adapter wrapping OTP hashing functions for DI."""

    def hash_code(self, code: str) -> str:
        return otp_service.hash_code(code)

    def verify_code(self, code: str, code_hash: str) -> bool:
        return otp_service.verify_code(code, code_hash)
