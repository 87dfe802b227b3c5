"""
Services — the provisioning logic that the orchestrator drives.
"""
