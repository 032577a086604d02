"""Dataset tools for the configured project."""

from typing import Annotated, Literal

from pydantic import Field

from sanity_mcp.services import datasets as dataset_service
from sanity_mcp.session import SessionContext
from sanity_mcp.store.repositories.datasets import DatasetRepository
from sanity_mcp.tools.base import ToolHandler
from sanity_mcp.tools.responses import ToolResult, success, tool_errors

DatasetName = Annotated[
    str, Field(min_length=1, description="Dataset name; reduced to lowercase letters and digits")
]
AclMode = Literal["private", "public"]


class DatasetTools(ToolHandler):
    tool_names = ("list_datasets", "create_dataset", "update_dataset", "delete_dataset")

    def __init__(self, session: SessionContext, datasets: DatasetRepository) -> None:
        super().__init__(session)
        self._datasets = datasets

    @tool_errors("Error listing datasets")
    async def list_datasets(self) -> ToolResult:
        """List the datasets in the configured project."""
        datasets = await dataset_service.list_datasets(self._datasets)
        return success(f"Found {len(datasets)} datasets", datasets=datasets)

    @tool_errors("Error creating dataset")
    async def create_dataset(
        self, name: DatasetName, acl_mode: AclMode | None = None
    ) -> ToolResult:
        """Create a dataset, private unless aclMode says otherwise."""
        result = await dataset_service.create_dataset(self._datasets, name, acl_mode)
        return success(f"Created dataset '{result['datasetName']}'", dataset=result)

    @tool_errors("Error updating dataset")
    async def update_dataset(self, name: DatasetName, acl_mode: AclMode) -> ToolResult:
        """Change a dataset's access control mode."""
        result = await dataset_service.update_dataset(self._datasets, name, acl_mode)
        return success(f"Updated dataset '{result['datasetName']}'", dataset=result)

    @tool_errors("Error deleting dataset")
    async def delete_dataset(self, name: DatasetName) -> ToolResult:
        """Delete a dataset and all of its documents. This cannot be undone."""
        result = await dataset_service.delete_dataset(self._datasets, name)
        return success(f"Deleted dataset '{result['datasetName']}'", dataset=result)
