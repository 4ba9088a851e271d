from pydantic import BaseModel, ConfigDict
from typing import Any, Optional, List

# values are bound to SQL exactly as the JSON body carries them
class TaskFields(BaseModel):
    Name: Optional[Any] = None
    Description: Optional[Any] = None
    DueDate: Optional[Any] = None
    Priority: Optional[Any] = None
    Location: Optional[Any] = None
    Status: Optional[Any] = None

class TaskCreate(TaskFields):
    ID: Optional[Any] = None

class TaskUpdate(TaskFields):
    pass

class TaskRead(TaskFields):
    ID: Any = None

    # rows come from SELECT *, so columns beyond the known ones pass through
    model_config = ConfigDict(from_attributes=True, extra="allow")


class TaskCreated(BaseModel):
    status: str = "success"
    ID: Optional[int] = None

class TaskList(BaseModel):
    status: str = "success"
    tasks: List[TaskRead]

class TaskDetail(BaseModel):
    status: str = "success"
    task: TaskRead

class Message(BaseModel):
    status: str = "success"
    message: str

class ErrorMessage(BaseModel):
    status: str = "error"
    message: str
