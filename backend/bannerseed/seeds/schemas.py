from pydantic import AnyHttpUrl, BaseModel, Field

from bannerseed.domain.models import SeedItem


class SeedItemSchema(BaseModel):
    title: str = Field(min_length=1)
    imageUrl: AnyHttpUrl
    imageAlt: str = ""
    ctaLabel: str
    ctaUrl: str

    def to_domain(self) -> SeedItem:
        return SeedItem(
            title=self.title,
            image_url=str(self.imageUrl),
            image_alt=self.imageAlt,
            cta_label=self.ctaLabel,
            cta_url=self.ctaUrl,
        )


class SeedFileSchema(BaseModel):
    banners: list[SeedItemSchema]
