"""tenkft-client - Python client for the 10,000ft resource management API.

This library wraps the 10,000ft HTTP+JSON API:
- Request execution with bounded, fixed-backoff retry on 429 and non-2xx responses
- Transparent pagination for "get all" operations
- Declarative resource schemas with write views for create/update
- Multi-source credential resolution

Example:
    ```python
    from tenkft_client import STAGING, TenKFTClient

    with TenKFTClient(token="my-token", env=STAGING, max_retries=3) as client:
        projects = client.get_all_projects({"fields": "tags,summary"})
        for project in projects:
            print(project.name)
    ```
"""

from tenkft_client.client import TenKFTClient
from tenkft_client.config import PRODUCTION, STAGING

__version__ = "0.1.0"

__all__ = ["PRODUCTION", "STAGING", "TenKFTClient", "__version__"]
