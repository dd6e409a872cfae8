class IdentityError(Exception):
    pass


class ValidationError(IdentityError):
    pass


class AuthenticationError(IdentityError):
    pass


class NotFoundError(IdentityError):
    pass


class StoreError(IdentityError):
    """The backing database failed or rejected an operation."""


class StoreUnavailableError(StoreError):
    pass


class CreateError(StoreError):
    pass


class UpdateError(StoreError):
    pass


class CodecError(IdentityError):
    pass


class EncodeError(CodecError):
    pass


class DecodeError(CodecError):
    pass
