from pydantic import BaseModel


class AdminStatus(BaseModel):
    is_admin: bool
