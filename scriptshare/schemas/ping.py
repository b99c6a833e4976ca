from scriptshare.schemas.base import BaseSchema


class PingReportSchema(BaseSchema):
    engine: str
    delivered: bool
