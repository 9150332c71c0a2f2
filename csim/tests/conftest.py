"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `csim`
package and `run.py` without needing PYTHONPATH set externally.
"""
import os
import sys

import pytest

# Compute project root: two directories above this file (csim/tests -> csim -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# csapp cache lab trace; csim-ref -s 4 -E 1 -b 4 gives hits:4 misses:5 evictions:3
YI_TRACE = [
    ' L 10,1',
    ' M 20,1',
    ' L 22,1',
    ' S 18,1',
    ' L 110,1',
    ' L 210,1',
    ' M 12,1',
]


@pytest.fixture
def write_trace(tmp_path):
    """Return a helper writing the given lines to a trace file, returning its path."""
    def _write(lines, name='test.trace'):
        path = tmp_path / name
        path.write_text(''.join(line + '\n' for line in lines), encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture
def yi_trace(write_trace):
    return write_trace(YI_TRACE, name='yi.trace')
