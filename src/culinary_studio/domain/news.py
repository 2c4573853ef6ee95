"""Models for studio news items."""

from pydantic import BaseModel, ConfigDict, Field

NEWS_ITEM_LIMIT = 5


class NewsItem(BaseModel):
    """Blog post from the studio feed."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    link: str
    pub_date: str = Field(default="", alias="pubDate")
    description: str = ""
    thumbnail: str | None = None


class NewsFeed(BaseModel):
    """Response of the RSS-to-JSON proxy."""

    model_config = ConfigDict(extra="ignore")

    status: str
    items: list[NewsItem] = Field(default_factory=list)
