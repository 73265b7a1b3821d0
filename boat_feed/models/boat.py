"""
Boat model: typed representation of a catalog record for the feed pipeline.

Used by the learner, scoring and ranking stages instead of raw dicts.
Built from catalog dicts via Boat.model_validate(d); field aliases match the
catalog's PascalCase keys so records validate as they arrive.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class BoatImage(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    image_url: str = Field(alias="ImageUrl")
    text: Optional[str] = Field(default=None, alias="Text")


class BoatEngine(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    builder: Optional[str] = Field(default=None, alias="Builder")
    model: Optional[str] = Field(default=None, alias="Model")
    qty: Optional[int] = Field(default=None, alias="Qty")
    hp: Optional[float] = Field(default=None, alias="HP")
    year_built: Optional[int] = Field(default=None, alias="YearBuilt")
    hours: Optional[float] = Field(default=None, alias="Hours")


class Boat(BaseModel):
    """
    Boat payload used across the feed stages.

    All fields except boat_id are optional to support partial data from the catalog.
    Numeric fields that are present but not numeric fail validation, which makes
    the record malformed (see parse_boats).
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    boat_id: str = Field(alias="BoatID")
    boat_type: Optional[str] = Field(default=None, alias="BoatType")
    agency_email: Optional[str] = Field(default=None, alias="AgencyEmail")
    ins_date: Optional[str] = Field(default=None, alias="InsDate")

    builder: str = Field(default="", alias="Builder")
    model: str = Field(default="", alias="Model")
    year_built: Optional[int] = Field(default=None, alias="YearBuilt")
    length: Optional[float] = Field(default=None, alias="Length")
    boat_families: Optional[str] = Field(default=None, alias="BoatFamilies")

    beam: Optional[float] = Field(default=None, alias="Beam")
    draft: Optional[float] = Field(default=None, alias="Draft")
    max_people: Optional[int] = Field(default=None, alias="MaxPeople")
    speed_max: Optional[float] = Field(default=None, alias="SpeedMax")
    range_nm: Optional[float] = Field(default=None, alias="Range")
    fuel: Optional[float] = Field(default=None, alias="Fuel")
    water: Optional[float] = Field(default=None, alias="Water")
    generator: Optional[str] = Field(default=None, alias="Generator")
    hull_material: Optional[str] = Field(default=None, alias="HullMaterial")

    country: Optional[str] = Field(default=None, alias="Country")
    country_iso: Optional[str] = Field(default=None, alias="CountryISOCode")
    harbor: Optional[str] = Field(default=None, alias="Harbor")
    visible_at: Optional[str] = Field(default=None, alias="VisibleAt")
    city: Optional[str] = Field(default=None, alias="City")

    cabins: Optional[int] = Field(default=None, alias="Cabins")
    baths: Optional[int] = Field(default=None, alias="Baths")

    is_new: bool = Field(default=False, alias="New")
    stock: bool = Field(default=False, alias="Stock")
    highlighted: bool = Field(default=False, alias="Highlighted")
    sold: bool = Field(default=False, alias="Sold")
    prof_use: bool = Field(default=False, alias="ProfUse")
    vintage: bool = Field(default=False, alias="Vintage")
    watercraft: bool = Field(default=False, alias="Watercraft")

    sale: bool = Field(default=False, alias="Sale")
    sell_price: float = Field(default=0, alias="SellPrice")
    sell_price_currency: str = Field(default="EUR", alias="SellPriceCurrency")
    sell_price_formatted: Optional[str] = Field(default=None, alias="SellPriceFormatted")
    sell_price_reduced: bool = Field(default=False, alias="SellPriceReduced")
    charter: bool = Field(default=False, alias="Charter")

    image_url: Optional[str] = Field(default=None, alias="ImageUrl")
    images_list: Optional[List[BoatImage]] = Field(default=None, alias="ImagesList")
    images_hq: bool = Field(default=False, alias="ImagesHQ")
    images_360: bool = Field(default=False, alias="Images360")
    video: bool = Field(default=False, alias="Video")

    engines_list: Optional[List[BoatEngine]] = Field(default=None, alias="EnginesList")

    @field_validator("boat_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(int(v))
        if isinstance(v, str) and not v.strip():
            raise ValueError("BoatID cannot be empty")
        return v

    @field_validator(
        "builder", "model", mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator(
        "is_new", "stock", "highlighted", "sold", "prof_use", "vintage", "watercraft",
        "sale", "sell_price_reduced", "charter", "images_hq", "images_360", "video",
        mode="before",
    )
    @classmethod
    def _none_to_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("sell_price", mode="before")
    @classmethod
    def _none_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    def family_tokens(self) -> List[str]:
        """Comma-delimited BoatFamilies split into trimmed, non-empty tokens."""
        if not self.boat_families:
            return []
        return [f.strip() for f in self.boat_families.split(",") if f.strip()]

    def total_hp(self) -> float:
        """Sum of HP * quantity over all engines."""
        return sum((e.hp or 0) * (e.qty or 1) for e in self.engines_list or [])


def parse_boats(records: List[Union[Dict[str, Any], "Boat"]]) -> List["Boat"]:
    """
    Convert catalog dicts (or Boats) to Boat models, dropping malformed records.

    A record that fails validation is logged and excluded; the rest of the batch survives.
    """
    boats: List[Boat] = []
    for record in records:
        if isinstance(record, Boat):
            boats.append(record)
            continue
        try:
            boats.append(Boat.model_validate(record))
        except ValidationError as e:
            record_id = record.get("BoatID") if isinstance(record, dict) else None
            logger.warning(
                "[parse] MALFORMED_RECORD boat_id=%r errors=%d first=%s",
                record_id, e.error_count(), e.errors()[0].get("msg"),
            )
    return boats
