import json


class MulticallException(Exception):
    """Base exception carrying the request that failed and why."""

    def __init__(self, request=None, response=None, underlying_exception=None, extra_info=None):
        self.request = request
        self.response = response
        self.underlying_exception: Exception = underlying_exception
        self.extra_info = extra_info
        super().__init__(extra_info)

    def __str__(self):
        ret = {
            'request': self.request,
            'response': self.response,
            'extra_info': self.extra_info,
            'exception': None,
        }
        if isinstance(self.underlying_exception, Exception):
            ret.update({'exception': str(self.underlying_exception)})
        return json.dumps(ret, default=str)

    def __repr__(self):
        return self.__str__()


class NoAddressFound(MulticallException):
    """Neither an explicit aggregator address nor a known chain id was supplied."""


class SignerNotConfigured(MulticallException):
    """A state-changing operation was requested without a signer."""


class InvalidCallError(MulticallException):
    """A call descriptor cannot be encoded."""
