"""
Behave environment configuration

This file is run before and after test scenarios to set up and tear down
the test environment.
"""

from textanchor.logging_config import GlobalIndent


def before_scenario(context, scenario):
    """Run before each scenario"""
    # Clean up context for each scenario
    for name in ("selectors", "result", "target", "description"):
        if hasattr(context, name):
            delattr(context, name)
    GlobalIndent.reset()
