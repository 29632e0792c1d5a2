"""
Web API Schemas - Pydantic models for request/response
"""
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class PublishRequest(BaseModel):
    """
    Body of POST /publish.

    Fields are optional here so that missing values are reported by
    PublishStatusService with the same 400 wording as invalid ones.
    """

    court_centre_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    court_list_type: Optional[str] = None
    make_external_calls: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True
