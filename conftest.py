"""
Global pytest configuration.
"""
import os
import sys

# Top-level packages (core, voting, engine, ...) importable without an install
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)
