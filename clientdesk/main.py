# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Development server entry point.

Example:
    $ clientdesk
    $ uvicorn clientdesk.api.app:create_app --factory --reload
"""

import uvicorn


def run() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(
        "clientdesk.api.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    run()
