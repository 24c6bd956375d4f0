"""
Todo Summary Backend package.

This module marks the 'src.api' directory as a Python package. The API
application lives in src.api.main (app, create_app) and the liveness
listener in src.api.liveness.
"""
