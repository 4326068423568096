"""
AES-256 single-block cipher engine.

Encryption schedule:
- Round 0: AddRoundKey
- Rounds 1-13: SubBytes, ShiftRows, MixColumns, AddRoundKey
- Round 14: SubBytes, ShiftRows, AddRoundKey (no MixColumns)

Decryption walks the rounds backwards with the inverse operations:
- Round 14: AddRoundKey
- Rounds 13-1: InvShiftRows, InvSubBytes, AddRoundKey, InvMixColumns
- Round 0: InvShiftRows, InvSubBytes, AddRoundKey (no InvMixColumns)

The engine holds no state; the caller supplies the round keys produced by
``key_schedule.key_expansion``.
"""

from .errors import BlockLengthMismatch
from .key_schedule import NUM_ROUNDS
from .trace import TraceRecorder
from .transforms import (
    State,
    add_round_key,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_columns,
    shift_rows,
    sub_bytes,
)
from .utils import BLOCK_SIZE, bytes_to_state, copy_state, state_to_bytes

_FULL_ROUND = ["SubBytes", "ShiftRows", "MixColumns", "AddRoundKey"]
_INV_FULL_ROUND = ["InvShiftRows", "InvSubBytes", "AddRoundKey", "InvMixColumns"]

# (round, operations)
ENCRYPT_SCHEDULE = (
    [(0, ["AddRoundKey"])]
    + [(r, _FULL_ROUND) for r in range(1, NUM_ROUNDS)]
    + [(NUM_ROUNDS, ["SubBytes", "ShiftRows", "AddRoundKey"])]
)

DECRYPT_SCHEDULE = (
    [(NUM_ROUNDS, ["AddRoundKey"])]
    + [(r, _INV_FULL_ROUND) for r in range(NUM_ROUNDS - 1, 0, -1)]
    + [(0, ["InvShiftRows", "InvSubBytes", "AddRoundKey"])]
)

_UNARY_OPERATIONS = {
    "SubBytes": sub_bytes,
    "ShiftRows": shift_rows,
    "MixColumns": mix_columns,
    "InvSubBytes": inv_sub_bytes,
    "InvShiftRows": inv_shift_rows,
    "InvMixColumns": inv_mix_columns,
}


def _run_schedule(
    state: State,
    schedule: list[tuple[int, list[str]]],
    round_keys: list[State],
    tracer: TraceRecorder | None,
    direction: str,
    block_index: int,
) -> State:
    for round_num, operations in schedule:
        for op in operations:
            if op == "AddRoundKey":
                state = add_round_key(state, round_keys[round_num])
            else:
                state = _UNARY_OPERATIONS[op](state)

            if tracer is not None:
                tracer.record(
                    block=block_index,
                    direction=direction,
                    round=round_num,
                    operation=op,
                    state=copy_state(state),
                )
    return state


def _check_inputs(block: bytes, round_keys: list[State]) -> None:
    if len(block) != BLOCK_SIZE:
        raise BlockLengthMismatch(f"Block must be 16 bytes, got {len(block)}")
    if len(round_keys) != NUM_ROUNDS + 1:
        raise ValueError(f"Expected 15 round keys, got {len(round_keys)}")


def encrypt_block(
    block: bytes,
    round_keys: list[State],
    tracer: TraceRecorder | None = None,
    block_index: int = 0,
) -> bytes:
    """
    Encrypt a single 16-byte block.

    Args:
        block: 16-byte input block
        round_keys: 15 round keys from ``key_expansion``
        tracer: Optional trace recorder, fed the state after each operation
        block_index: Position of the block in its message (trace only)

    Returns:
        16-byte ciphertext block
    """
    _check_inputs(block, round_keys)
    state = bytes_to_state(block)
    state = _run_schedule(state, ENCRYPT_SCHEDULE, round_keys, tracer, "encrypt", block_index)
    return state_to_bytes(state)


def decrypt_block(
    block: bytes,
    round_keys: list[State],
    tracer: TraceRecorder | None = None,
    block_index: int = 0,
) -> bytes:
    """
    Decrypt a single 16-byte block.

    Returns the inverse cipher output; in CBC mode this still has to be
    XORed with the chaining value to give plaintext.
    """
    _check_inputs(block, round_keys)
    state = bytes_to_state(block)
    state = _run_schedule(state, DECRYPT_SCHEDULE, round_keys, tracer, "decrypt", block_index)
    return state_to_bytes(state)
