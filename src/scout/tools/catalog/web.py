"""Web, search and social media contracts."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, Field, StrictBool

from scout.tools.base import ToolContract, ToolInput
from scout.tools.types import AbsolutePath, DateRange, NonEmptyStr, SocialNetwork, Url


def _bare_username(value: str | None) -> str | None:
    if value and value.startswith("@"):
        raise ValueError("Username should not include the @ symbol")
    return value


class WebSearchInput(ToolInput):
    query: NonEmptyStr
    date_range: DateRange = Field(default="all", alias="dateRange")


class BrowserNavigateInput(ToolInput):
    url: Url
    raw_html: StrictBool = Field(default=False, alias="rawHtml")


class WebDownloadInput(ToolInput):
    url: Url
    path: AbsolutePath


class SocialsSearchInput(ToolInput):
    network: SocialNetwork = "twitter"
    query: str | None = None
    username: Annotated[str | None, AfterValidator(_bare_username)] = None


def query_or_username(data: SocialsSearchInput) -> list[str]:
    if data.query or data.username:
        return []
    return ["(root): Either query or username must be provided."]


WEB_SEARCH = ToolContract(
    name="web_search",
    description="Web search engine for up-to-date information.",
    input_schema=WebSearchInput,
)
BROWSER_NAVIGATE = ToolContract(
    name="browser_navigate",
    description="Web browser navigation tool.",
    input_schema=BrowserNavigateInput,
)
WEB_DOWNLOAD = ToolContract(
    name="web_download",
    description="File download tool from web sources.",
    input_schema=WebDownloadInput,
)
SOCIALS_SEARCH = ToolContract(
    name="socials_search",
    description="Social media search tool (X/Twitter or Bluesky).",
    input_schema=SocialsSearchInput,
    refinements=(query_or_username,),
)

CONTRACTS = (WEB_SEARCH, BROWSER_NAVIGATE, WEB_DOWNLOAD, SOCIALS_SEARCH)
