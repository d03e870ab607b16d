"""Request bodies shared by several routes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from roster.domain.value import AccountProfile


class APIModel(BaseModel):
    """Request body accepting camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileFields(APIModel):
    """Profile fields a joiner or registrant may send."""

    email: str | None = None
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None

    def profile(self) -> AccountProfile:
        return AccountProfile(
            email=self.email,
            display_name=self.display_name,
            first_name=self.first_name,
            last_name=self.last_name,
            phone_number=self.phone_number,
        )
