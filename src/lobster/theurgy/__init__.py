"""
Theurgy - Command implementations for the Lobster CLI.

Each module corresponds to a top-level CLI command:
- sign:    Sign call data from the call-building service
- inspect: Decode a signed extrinsic
- confirm: Decode post-submission chain events
"""
