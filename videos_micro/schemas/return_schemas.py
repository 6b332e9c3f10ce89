from pydantic import BaseModel, Field
from typing import Any, List, Optional


class ApiResponse(BaseModel):
    status_code: int = Field(..., alias="statusCode")
    data: Optional[Any] = None
    message: str = "Success"
    success: bool = True

    class Config:
        populate_by_name = True


class ApiErrorResponse(BaseModel):
    status_code: int = Field(..., alias="statusCode")
    message: str = "Something went wrong"
    success: bool = False
    errors: List[Any] = Field(default_factory=list)

    class Config:
        populate_by_name = True
