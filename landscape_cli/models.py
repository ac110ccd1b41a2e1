"""
Typed Landscape API responses.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)


class Creator(_Entity):
    id: int
    name: str
    email: str


class Script(_Entity):
    id: int
    title: str
    username: str
    creator: Creator
    time_limit: int
    access_group: str
    attachments: List[str] = Field(default_factory=list)


class ScriptExecution(_Entity):
    """Activity created by an ExecuteScript call."""

    id: int
    creation_time: str
    creator: Creator
    computer_id: Optional[Union[int, str]] = None
    parent_id: Optional[Union[int, str]] = None
    summary: str
    activity_type: str = Field(alias='type')


class Computer(_Entity):
    """Host record as returned by GetComputers."""

    id: int
    hostname: Optional[str] = None
    title: Optional[str] = None
    comment: Optional[str] = None
    total_memory: Optional[int] = None
    total_swap: Optional[int] = None
    tags: Optional[List[str]] = None
    annotations: Dict[str, str] = Field(default_factory=dict)
    cloud_instance_metadata: Dict[str, Any]
    reboot_required_flag: bool
    access_group: Optional[str] = None
    distribution: Optional[str] = None
    vm_info: Optional[str] = None
    container_info: Optional[str] = None
    update_manager_prompt: Optional[str] = None
    last_ping_time: Optional[str] = None
    last_exchange_time: Optional[str] = None

    @field_validator('annotations', 'cloud_instance_metadata', mode='before')
    @classmethod
    def _null_as_empty(cls, value):
        return {} if value is None else value
