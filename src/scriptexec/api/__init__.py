"""
Expose the FastAPI application factory.

Run the service with ``python -m scriptexec.api``, or with Uvicorn
directly:

```sh
uvicorn --factory scriptexec.api:create_app
```
"""

from .main import create_app

__all__ = ["create_app"]
