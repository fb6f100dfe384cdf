"""Drop zone descriptors supplied by the canvas surface."""

from pydantic import BaseModel, ConfigDict, Field

from registry import WILDCARD


class Bounds(BaseModel):
    """Axis-aligned rectangle in canvas pixels."""
    model_config = ConfigDict(frozen=True)

    x: float = 0
    y: float = 0
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)

    def contains(self, x: float, y: float) -> bool:
        """Half-open containment: left/top edges inside, right/bottom outside."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


class DropZone(BaseModel):
    """Named region with acceptance and capacity rules."""
    model_config = ConfigDict(frozen=True)

    id: str
    accepts: tuple[str, ...] = (WILDCARD,)
    max_components: int | None = Field(default=None, gt=0)
    bounds: Bounds

    def accepts_type(self, element_type: str) -> bool:
        return WILDCARD in self.accepts or element_type in self.accepts


def default_zones() -> list[DropZone]:
    """Zones of the stock page canvas."""
    return [
        DropZone(
            id="main-canvas",
            accepts=(WILDCARD,),
            bounds=Bounds(x=0, y=0, width=1200, height=2000),
        ),
        DropZone(
            id="header-zone",
            accepts=("header", "navigation", "logo"),
            max_components=1,
            bounds=Bounds(x=0, y=0, width=1200, height=80),
        ),
        DropZone(
            id="footer-zone",
            accepts=("footer", "navigation"),
            max_components=1,
            bounds=Bounds(x=0, y=1920, width=1200, height=120),
        ),
    ]
