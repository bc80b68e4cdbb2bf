"""Result models."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ExtractResult(BaseModel):
    """The four-part split of a domain name.

    Field order is part of the serialized form:
    subdomain, domain, suffix, registered_domain.
    """
    model_config = ConfigDict(frozen=True)

    subdomain: Optional[str] = Field(None, description='The "mirrors.tuna" part of "mirrors.tuna.tsinghua.edu.cn"')
    domain: Optional[str] = Field(None, description='The "tsinghua" part of "mirrors.tuna.tsinghua.edu.cn"')
    suffix: Optional[str] = Field(None, description='The "edu.cn" part of "mirrors.tuna.tsinghua.edu.cn"')
    registered_domain: Optional[str] = Field(None, description='The "tsinghua.edu.cn" part of "mirrors.tuna.tsinghua.edu.cn"')
