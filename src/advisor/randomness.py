#!/usr/bin/env python3
"""
Seeded random streams for the simulators.

Every stochastic component takes a `random.Random`. Callers that want
reproducible runs build one here from a master seed and derive independent
per-purpose streams (equity, preflop mixing) from the same seed.
"""

import hashlib
import hmac
import random
import struct
from typing import Optional

SEED_MASK = 0xFFFFFFFF

EQUITY_STREAM = 0
PREFLOP_STREAM = 1


def generate_seed(seed: Optional[int] = None) -> int:
    """
    Cap a chosen seed to 32 bits, or draw a fresh one.

    Args:
        seed: Chosen seed, None for a generated one

    Returns:
        32-bit seed
    """
    if seed is not None:
        return abs(seed) & SEED_MASK
    return random.randint(0, SEED_MASK)


def derive_seed(seed: int, namespace: int) -> int:
    """
    Derive a deterministic 32-bit seed for one stream of a master seed.

    Args:
        seed: 32-bit master seed
        namespace: Stream number (EQUITY_STREAM, PREFLOP_STREAM, ...)

    Returns:
        32-bit derived seed
    """
    if not (0 <= seed <= SEED_MASK):
        raise ValueError("Master seed must be a 32-bit integer")

    digest = hmac.new(struct.pack('>I', seed), struct.pack('>Q', namespace), hashlib.sha256).digest()
    return struct.unpack('>I', digest[:4])[0]


def create_rng(seed: Optional[int] = None, namespace: Optional[int] = None) -> random.Random:
    """
    Build a random.Random, optionally for a derived stream.

    Args:
        seed: Master seed, None for an unseeded generator
        namespace: Stream number; ignored without a seed

    Returns:
        Generator instance owned by the caller
    """
    if seed is None:
        return random.Random()
    seed = generate_seed(seed)
    if namespace is not None:
        seed = derive_seed(seed, namespace)
    return random.Random(seed)
