from enum import Enum
from typing import List, Optional

from pydantic import Field

from ...core.models import WireModel
from ..models import Resource


class FirmwareStatus(str, Enum):
    PENDING = "Pending"
    EXTRACTING = "Extracting"
    ANALYZING = "Analyzing"
    READY = "Ready"
    ERROR = "Error"


class StatusMessage(WireModel):
    error_code: Optional[int] = Field(default=None, alias="errorCode")
    message: Optional[str] = None


class FirmwareProperties(WireModel):
    file_name: Optional[str] = Field(default=None, alias="fileName")
    vendor: Optional[str] = None
    model: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    file_size: Optional[int] = Field(default=None, alias="fileSize")
    status: Optional[FirmwareStatus] = None
    status_messages: Optional[List[StatusMessage]] = Field(
        default=None, alias="statusMessages"
    )


class Firmware(Resource):
    """
    A firmware image uploaded to a firmware analysis workspace.
    """

    properties: Optional[FirmwareProperties] = None
