# CLI package for the contradiction detector meta-harness
"""
Command-line interface for running the meta-test locally or in CI.

Commands:
    metaharness run:  Run every scheduled test case
    metaharness plan: Show fixtures and modes without running
"""
