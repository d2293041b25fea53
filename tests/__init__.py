"""
chassisgen test suite
=====================

Test Modules
------------
- test_models.py: Tests for the answer record and component catalog
- test_prompts.py: Tests for the interactive question sequence
- test_generator.py: Tests for cloning and customizing the boilerplate
- test_cli.py: Tests for the command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Skip the end-to-end pipeline tests
    pytest -m "not integration"

    # Run specific test class
    pytest tests/test_prompts.py::TestCollect
"""
