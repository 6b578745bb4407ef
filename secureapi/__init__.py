# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authentication gateway: registration, JWT login and bearer-protected routes."""

__version__ = "0.1.0"
