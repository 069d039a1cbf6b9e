from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ConfigEntry(BaseModel):
    """One domain's backend configuration from the shared config file.

    Only `type` is interpreted by the core. Everything else belongs to the
    publisher named by `type` and is kept verbatim (extra="allow").
    """
    type: Optional[str] = Field(None, description="Backend kind, e.g. 'render' or 's3'")

    # s3 backend
    aws_key: Optional[str] = None
    aws_secret: Optional[str] = None
    aws_region: Optional[str] = None

    model_config = ConfigDict(extra="allow")


def placeholder_text(domain: str) -> str:
    """Config entry written by init: the domain key with every field commented out."""
    return (
        f"{domain}:\n"
        "# type: s3\n"
        "# aws_key: foo\n"
        "# aws_secret: bar\n"
        "# aws_region: us-east-1\n"
    )
