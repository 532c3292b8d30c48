"""
Poseidon Hash
=============

Poseidon over the BN254 scalar field, compatible with circomlib's
``Poseidon(n)`` template and circomlibjs ``buildPoseidon``.

Round constants and the MDS matrix are derived with the Grain LFSR
parameter generator from the Poseidon reference implementation, using
alpha = 5, 8 full rounds and circomlib's partial round counts.

Usage:
    from blockcreds.zk.poseidon import poseidon

    digest = poseidon([800, 12345])
"""

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache


# BN254 scalar field order
FIELD_ORDER = 21888242871839275222246405745257275088548364400416034343698204186575808495617

ALPHA = 5
FULL_ROUNDS = 8

# circomlib N_ROUNDS_P, indexed by state width t - 2
PARTIAL_ROUNDS = (56, 57, 56, 60, 60, 63, 64, 63, 60, 66, 60, 65, 70, 60, 64, 68)

MAX_INPUTS = len(PARTIAL_ROUNDS)


def _to_bits(value: int, width: int) -> list[int]:
    return [int(b) for b in format(value, f"0{width}b")]


class GrainLFSR:
    """Self-shrinking Grain LFSR used to derive Poseidon parameters."""

    def __init__(self, field_bits: int, width: int, full_rounds: int, partial_rounds: int) -> None:
        seed = (
            _to_bits(1, 2)  # prime field
            + _to_bits(0, 4)  # x^alpha s-box
            + _to_bits(field_bits, 12)
            + _to_bits(width, 12)
            + _to_bits(full_rounds, 10)
            + _to_bits(partial_rounds, 10)
            + [1] * 30
        )
        self._state = deque(seed, maxlen=80)
        for _ in range(160):
            self._clock()

    def _clock(self) -> int:
        s = self._state
        bit = s[62] ^ s[51] ^ s[38] ^ s[23] ^ s[13] ^ s[0]
        s.append(bit)
        return bit

    def next_bit(self) -> int:
        while True:
            keep = self._clock()
            bit = self._clock()
            if keep:
                return bit

    def random_int(self, num_bits: int) -> int:
        value = 0
        for _ in range(num_bits):
            value = (value << 1) | self.next_bit()
        return value

    def field_element(self, num_bits: int, modulus: int) -> int:
        """Draw a uniformly random element by rejection sampling."""
        while True:
            value = self.random_int(num_bits)
            if value < modulus:
                return value


@dataclass(frozen=True)
class PoseidonParameters:
    """Parameters of one Poseidon instance."""

    width: int
    full_rounds: int
    partial_rounds: int
    round_constants: tuple[int, ...]
    mds: tuple[tuple[int, ...], ...]


def _cauchy_mds(grain: GrainLFSR, width: int, field_bits: int, p: int) -> tuple[tuple[int, ...], ...]:
    while True:
        values = [grain.random_int(field_bits) % p for _ in range(2 * width)]
        while len(set(values)) != len(values):
            values = [grain.random_int(field_bits) % p for _ in range(2 * width)]
        xs, ys = values[:width], values[width:]
        if any((x + y) % p == 0 for x in xs for y in ys):
            continue
        return tuple(tuple(pow(x + y, p - 2, p) for y in ys) for x in xs)


@lru_cache(maxsize=None)
def parameters(width: int) -> PoseidonParameters:
    """
    Generate (and cache) the parameters for state width ``width``.

    Args:
        width: State width t, i.e. number of inputs + 1

    Returns:
        PoseidonParameters for that width
    """
    if not 2 <= width <= MAX_INPUTS + 1:
        raise ValueError(f"Unsupported Poseidon width {width}, must be 2-{MAX_INPUTS + 1}")

    partial_rounds = PARTIAL_ROUNDS[width - 2]
    field_bits = FIELD_ORDER.bit_length()
    grain = GrainLFSR(field_bits, width, FULL_ROUNDS, partial_rounds)

    constants = tuple(
        grain.field_element(field_bits, FIELD_ORDER)
        for _ in range((FULL_ROUNDS + partial_rounds) * width)
    )
    mds = _cauchy_mds(grain, width, field_bits, FIELD_ORDER)

    return PoseidonParameters(
        width=width,
        full_rounds=FULL_ROUNDS,
        partial_rounds=partial_rounds,
        round_constants=constants,
        mds=mds,
    )


def permute(state: Sequence[int], params: PoseidonParameters) -> list[int]:
    """Apply the Poseidon permutation to a full state."""
    p = FIELD_ORDER
    t = params.width
    half = params.full_rounds // 2
    rounds = params.full_rounds + params.partial_rounds
    c = params.round_constants

    state = list(state)
    for r in range(rounds):
        state = [(x + c[r * t + i]) % p for i, x in enumerate(state)]
        if r < half or r >= half + params.partial_rounds:
            state = [pow(x, ALPHA, p) for x in state]
        else:
            state[0] = pow(state[0], ALPHA, p)
        state = [sum(m * x for m, x in zip(row, state)) % p for row in params.mds]
    return state


def poseidon(inputs: Sequence[int]) -> int:
    """
    Hash field elements with Poseidon.

    Args:
        inputs: 1-16 integers in [0, FIELD_ORDER)

    Returns:
        The digest as an integer field element

    Raises:
        ValueError: If an input is outside the field or the arity is unsupported
    """
    if not 1 <= len(inputs) <= MAX_INPUTS:
        raise ValueError(f"Poseidon takes 1-{MAX_INPUTS} inputs, got {len(inputs)}")
    for value in inputs:
        if not 0 <= value < FIELD_ORDER:
            raise ValueError(f"Input {value} is not a BN254 field element")

    params = parameters(len(inputs) + 1)
    return permute([0, *inputs], params)[0]
