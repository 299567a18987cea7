"""
reconstrap Core Module
Install context, orchestration and console reporting
"""

# Submodules are imported on-demand; installers import core.results, so
# importing the orchestrator here would be circular.
