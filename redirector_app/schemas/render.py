from pydantic import BaseModel, ConfigDict, Field
from typing import List


class Route(BaseModel):
    type: str = "redirect"
    source: str
    destination: str


class Service(BaseModel):
    """A static site service in a render.com blueprint (render.yaml)"""
    type: str = "web"
    name: str
    env: str = "static"
    build_command: str = Field("", alias="buildCommand")
    static_publish_path: str = Field("./build", alias="staticPublishPath")
    routes: List[Route] = Field(default_factory=list)

    # Pydantic V2 style configuration
    model_config = ConfigDict(populate_by_name=True)


class RenderConfig(BaseModel):
    services: List[Service] = Field(default_factory=list)
