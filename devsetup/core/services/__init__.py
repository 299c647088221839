"""Provisioning services — presence, install, shell config, verify, orchestrate."""
