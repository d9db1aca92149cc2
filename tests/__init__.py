"""
FiniA Test Suite - Automated testing framework for application validation.

This package contains all test modules organized by test type:
- integration/ - API and integration tests
- unit/ - Unit tests for individual components
- performance/ - Performance benchmarks
- fixtures/ - Shared test fixtures and utilities
- data/ - Test data factories and generators
"""
