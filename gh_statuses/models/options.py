from typing import ClassVar

from pydantic import BaseModel, ConfigDict, PositiveInt


class ApiOptions(BaseModel):
    """Controls how list endpoints are paged through"""

    model_config = ConfigDict(frozen=True)

    NONE: ClassVar["ApiOptions"]
    """Sentinel for "no options", which reads every page using the server's default page size"""

    start_page: PositiveInt | None = None
    """The first page that will be requested"""

    page_count: PositiveInt | None = None
    """The maximum number of pages that will be read. When unset, pages are read until the server reports no more"""

    page_size: PositiveInt | None = None
    """The number of records requested per page"""

    def query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.page_size is not None:
            params["per_page"] = str(self.page_size)
        if self.start_page is not None:
            params["page"] = str(self.start_page)
        return params


ApiOptions.NONE = ApiOptions()
