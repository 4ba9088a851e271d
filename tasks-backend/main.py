import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import schemas
from database import DATABASE_URL, SessionLocal, engine, ensure_sqlite_dir, env_flag, init_db
from errors import TaskNotFoundError, engine_message, register_exception_handlers
from logging_setup import setup_logging

logger = logging.getLogger(__name__)

INSERT_TASK = text(
    "INSERT INTO tblTasks (ID, Name, Description, DueDate, Priority, Location, Status) "
    "VALUES (:ID, :Name, :Description, :DueDate, :Priority, :Location, :Status)"
)
SELECT_TASKS = text("SELECT * FROM tblTasks")
SELECT_TASK = text("SELECT * FROM tblTasks WHERE ID = :ID")
UPDATE_TASK = text(
    "UPDATE tblTasks "
    "SET Name = :Name, Description = :Description, DueDate = :DueDate, "
    "Priority = :Priority, Location = :Location, Status = :Status "
    "WHERE ID = :ID"
)
DELETE_TASK = text("DELETE FROM tblTasks WHERE ID = :ID")

ERROR_RESPONSES = {400: {"model": schemas.ErrorMessage}}
LOOKUP_RESPONSES = {**ERROR_RESPONSES, 404: {"model": schemas.ErrorMessage}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    ensure_sqlite_dir(DATABASE_URL)
    if env_flag("TASKS_CREATE_SCHEMA"):
        init_db(bind=engine)
        logger.info("ensured table tblTasks exists")
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("connected to the database url=%s", engine.url.render_as_string(hide_password=True))
    except SQLAlchemyError as exc:
        logger.error("error connecting to database: %s", engine_message(exc))
    yield
    engine.dispose()


app = FastAPI(title="Tasks - FastAPI Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@app.post("/tasks", status_code=status.HTTP_201_CREATED, response_model=schemas.TaskCreated, responses=ERROR_RESPONSES)
def create_task(task: schemas.TaskCreate, db: Session = Depends(get_db)):
    result = db.execute(INSERT_TASK, task.model_dump())
    db.commit()
    task_id = result.lastrowid if result.lastrowid is not None else task.ID
    logger.debug("created task %s", task_id)
    return schemas.TaskCreated(ID=task_id)


@app.get("/tasks", response_model=schemas.TaskList, responses=ERROR_RESPONSES)
def read_tasks(db: Session = Depends(get_db)):
    rows = db.execute(SELECT_TASKS).mappings().all()
    return schemas.TaskList(tasks=[schemas.TaskRead.model_validate(dict(r)) for r in rows])


@app.get("/tasks/{task_id}", response_model=schemas.TaskDetail, responses=LOOKUP_RESPONSES)
def read_task(task_id: int, db: Session = Depends(get_db)):
    row = db.execute(SELECT_TASK, {"ID": task_id}).mappings().first()
    if row is None:
        raise TaskNotFoundError(task_id)
    return schemas.TaskDetail(task=schemas.TaskRead.model_validate(dict(row)))


@app.put("/tasks/{task_id}", response_model=schemas.Message, responses=LOOKUP_RESPONSES)
def update_task(task_id: int, task: schemas.TaskUpdate, db: Session = Depends(get_db)):
    # every mutable column is overwritten; absent fields are written as NULL
    params = task.model_dump()
    params["ID"] = task_id
    result = db.execute(UPDATE_TASK, params)
    db.commit()
    if result.rowcount == 0:
        raise TaskNotFoundError(task_id)
    logger.debug("updated task %s", task_id)
    return schemas.Message(message="Task updated")


@app.delete("/tasks/{task_id}", response_model=schemas.Message, responses=LOOKUP_RESPONSES)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    result = db.execute(DELETE_TASK, {"ID": task_id})
    db.commit()
    if result.rowcount == 0:
        raise TaskNotFoundError(task_id)
    logger.debug("deleted task %s", task_id)
    return schemas.Message(message="Task deleted")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
