# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for odag_provisioner unit tests.

Available Utilities:
    Engine Doubles:
        - ScriptedEngineSocket: In-memory engine socket replying from a script
        - ScriptedConnector / HangingConnector: Injectable socket connectors
        - RawFrame, PeerClose, NO_REPLY: Script entries for failure paths

    Platform Doubles:
        - FakePlatform: Repository API and link service behind httpx.MockTransport

    Certificates:
        - write_certificate_bundle: Mint a CA and client certificate on disk
"""
