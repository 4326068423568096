"""
Trace recording and pretty printing for AES round operations.

Contains:
- TraceRecorder: JSON Lines trace + compact verbose stdout
- print_header / print_result: shared formatting helpers
"""

import json
from typing import Any, TextIO

from .utils import format_state_grid, state_to_hex


class TraceRecorder:
    """
    Records the state after each round operation.

    Supports:
    - In-memory records (always)
    - JSON Lines file output (when trace_file is set)
    - Compact verbose stdout (when verbose is set)
    """

    def __init__(self, verbose: bool = False, trace_file: TextIO | None = None):
        self.verbose = verbose
        self.trace_file = trace_file
        self._records: list[dict[str, Any]] = []

    def record(self, **kwargs) -> None:
        """Record a trace entry."""
        self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            if "state" in obj:
                obj = {**obj, "state": state_to_hex(obj["state"])}
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, bytes):
            return obj.hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        """Compact verbose line, one per operation."""
        block = record.get("block", 0)
        round_num = record.get("round", "?")
        operation = record.get("operation", "unknown")
        direction = record.get("direction", "")

        if "state" in record:
            state_hex = state_to_hex(record["state"])
            print(f"B{block:04d} {direction[:3]} R{round_num:>2}  {operation:16s} STATE:{state_hex}")

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_state(label: str, state: list[list[int]]) -> None:
    """Print a labelled 4x4 state grid."""
    print(f"{label}:")
    print(format_state_grid(state))


def print_result(ciphertext_hex: str, passed: bool = True) -> None:
    """Print final encryption result."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"Ciphertext: {ciphertext_hex}")

    status = "PASS" if passed else "FAIL"
    marker = "[OK]" if passed else "[ERROR]"
    print(f"Verification: {marker} {status}")
    print(f"{'='*70}")
