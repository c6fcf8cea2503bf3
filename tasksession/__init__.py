"""
TASKSESSION - Client session core for the task manager.

Lots:
    1. core     - configuration client
    2. logging  - logs JSON structurés, secrets masqués
    3. network  - client HTTP asynchrone (httpx)
    4. auth     - token, login/logout, injection du bearer
"""

__version__ = "0.1.0"
