#!/usr/bin/env python3
"""
Test runner for advisor module tests.

Runs the unit tests for every advisor component, then the full-hand
integration test.
"""

import sys
import pytest
from pathlib import Path


def run_advisor_tests():
    """Run all advisor module tests."""
    test_dir = Path(__file__).parent

    test_files = [
        "test_hand_strength.py",
        "test_opponent_profile.py",
        "test_randomness.py",
        "test_range_model.py",
        "test_range_tracker.py",
        "test_equity_calculator.py",
        "test_preflop_engine.py",
        "test_postflop_solver.py",
        "test_decision_engine.py",
        "test_integration.py",
    ]

    args = [
        "-v",
        "--tb=short",
        "--strict-markers",
        "--disable-warnings",
    ]

    for test_file in test_files:
        test_path = test_dir / test_file
        if test_path.exists():
            args.append(str(test_path))
        else:
            print(f"Warning: Test file not found: {test_path}")

    return pytest.main(args)


if __name__ == "__main__":
    print("Running Advisor Module Tests")
    print("=" * 50)

    exit_code = run_advisor_tests()

    if exit_code == 0:
        print("\nAll tests passed")
    else:
        print(f"\nTests failed with exit code: {exit_code}")

    sys.exit(exit_code)
