"""
Process-wide random source for the rand* builtins.

Template evaluations may run on several threads at once, so draws are
serialized through a lock. Tests swap in a seeded source with
set_random_source().
"""

import random
import string
import threading
from typing import Optional

from tmpl_funcs.config import settings

ALPHA = string.ascii_letters
NUMERIC = string.digits
ALPHA_NUMERIC = string.ascii_letters + string.digits
# Printable ASCII without space: "!" (0x21) through "~" (0x7e)
ASCII = "".join(chr(c) for c in range(0x21, 0x7F))


class RandomSource:
    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed) if seed is not None else random.SystemRandom()
        self._lock = threading.Lock()

    def choose(self, alphabet: str, count: int) -> str:
        """Return `count` characters drawn uniformly from `alphabet`."""
        if count <= 0:
            return ""
        with self._lock:
            return "".join(self._rng.choices(alphabet, k=count))


_source = RandomSource(settings.RANDOM_SEED)
_source_lock = threading.Lock()


def get_random_source() -> RandomSource:
    return _source


def set_random_source(source: RandomSource) -> RandomSource:
    """Install `source` as the process default and return the previous one."""
    global _source
    with _source_lock:
        previous, _source = _source, source
    return previous
