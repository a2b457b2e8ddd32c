from functools import wraps
from typing import Awaitable, Callable, TypeVar

__all__ = ["with_network_guard"]

R = TypeVar("R")


def with_network_guard(
    operation: Callable[..., Awaitable[R]],
    ensure_network: Callable[[], Awaitable[None]],
) -> Callable[..., Awaitable[R]]:
    """Wrap ``operation`` so that ``ensure_network`` runs before every call.

    ``ensure_network`` either returns once the signer is on the right chain
    or raises, in which case ``operation`` is never invoked.

    Example:
        >>> execute = with_network_guard(submit_and_wait, executor.ensure_network)
        >>> receipt = await execute(call)
    """

    @wraps(operation)
    async def guarded(*args, **kwargs) -> R:
        await ensure_network()
        return await operation(*args, **kwargs)

    return guarded
