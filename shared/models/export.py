"""Run-wide settings for one export, built once at startup."""

from pydantic import BaseModel, Field


class ExportSettings(BaseModel):
    """
    Everything an export run needs besides the store client itself.

    Attributes:
        resource (str): The requested API method, e.g. "products". Used verbatim for request paths and the output file name.
        page_size (int): Items per page descriptor.
        block_size (int): Items per batch request boundary.
        poll_delay (float): Seconds between two batch status polls.
        poll_timeout (float): Seconds a single batch may stay pending before the run aborts.
        output_dir (str): Directory the result file is written to.
        file_suffix (str): Appended to the resource name in the output file name.
        exact_pages (bool): Skip the page past the last item instead of requesting it.
    """

    resource: str = Field(min_length=1)
    page_size: int = Field(default=100, gt=0)
    block_size: int = Field(default=1000, gt=0)
    poll_delay: float = Field(default=4.0, ge=0)
    poll_timeout: float = Field(default=300.0, ge=0)
    output_dir: str = "."
    file_suffix: str = ""
    exact_pages: bool = False
