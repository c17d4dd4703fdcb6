import functools

import structlog


class Decorators:
    @staticmethod
    def log_invocation_with_scalar_args(func):
        """Limit the logging to scalar arguments so we don't log content"""

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with structlog.contextvars.bound_contextvars(function_name=func.__name__):
                scalar_args = [arg for arg in args if type(arg) in [int, str, bool]]
                scalar_kwargs = {k: v for k, v in kwargs.items() if type(v) in [int, str, bool]}
                logger = structlog.getLogger(func.__qualname__.split(".")[0])
                logger.debug(func.__name__, scalar_args=scalar_args, **scalar_kwargs)
                return func(*args, **kwargs)

        return wrapper
