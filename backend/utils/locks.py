"""
Process-local keyed mutexes.

Voucher creation reads state (last voucher number, party balance, item
stock) and writes the next state in the same transaction. Holding the
lock for every key the transaction touches keeps concurrent requests in
this process totally ordered per key. Row locks (``with_for_update``)
and the voucher-number unique constraint cover the multi-process case.

Locks are reference counted: an entry lives only while some thread holds
or waits for it, so the registry does not grow with the number of
parties and items ever touched.
"""
import threading
from contextlib import contextmanager, ExitStack

_registry_lock = threading.Lock()
# key -> [lock, number of threads holding or waiting for it]
_locks = {}


def sequence_key(company_id: int, voucher_type) -> tuple:
    return ("1-sequence", company_id, str(voucher_type.value))


def party_key(party_id: int) -> tuple:
    return ("2-party", party_id)


def item_key(item_id: int) -> tuple:
    return ("3-item", item_id)


def _checkout(key: tuple) -> threading.Lock:
    with _registry_lock:
        entry = _locks.get(key)
        if entry is None:
            entry = _locks[key] = [threading.Lock(), 0]
        entry[1] += 1
        return entry[0]


def _checkin(key: tuple) -> None:
    with _registry_lock:
        entry = _locks[key]
        entry[1] -= 1
        if entry[1] == 0:
            del _locks[key]


@contextmanager
def keyed_lock(key: tuple):
    lock = _checkout(key)
    try:
        with lock:
            yield
    finally:
        _checkin(key)


def active_keys() -> list:
    """Keys currently held or waited on."""
    with _registry_lock:
        return list(_locks)


@contextmanager
def hold(*keys: tuple):
    """Acquire the locks for ``keys`` in a fixed global order and release them on exit."""
    with ExitStack() as stack:
        for key in sorted(set(keys)):
            stack.enter_context(keyed_lock(key))
        yield
