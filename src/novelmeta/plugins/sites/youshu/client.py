from novelmeta.plugins.base.client import BaseClient
from novelmeta.plugins.registry import hub


@hub.register_client()
class YoushuClient(BaseClient):
    site_key = "youshu"
