from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class EventTimeSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date_time: str = Field(alias="dateTime")
    time_zone: str | None = Field(default=None, alias="timeZone")


class EventSchema(BaseModel):
    summary: str = Field(min_length=1)
    description: str = ""
    start: EventTimeSchema
    end: EventTimeSchema


class CreateEventRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event: EventSchema
    access_token: str | None = Field(default=None, alias="accessToken")
    user_email: str | None = Field(default=None, alias="userEmail")


class CreateOrderRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    mobile_number: str = Field(alias="mobileNumber", min_length=1)
    amount: Decimal


class CreateOrderResponseSchema(BaseModel):
    msg: str = "OK"
    url: str
    order_id: str = Field(serialization_alias="orderId")
