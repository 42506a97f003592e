"""
stepdist helper scripts

This package contains:
- generate_sample_session: Synthetic sensor log generator
- utils: Plotting helpers for replayed sessions

After installing the package with `pip install -e .`, imports work without
sys.path manipulation:

    from scripts.utils import save_replay_figure
    from scripts.generate_sample_session import generate_walk
"""

__version__ = "0.1.0"
