"""Database table definitions for blog posts, projects, and their tags"""

import datetime as dt
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, Date, DateTime, JSON, String, Text
from sqlmodel import Field, SQLModel


class Tag(SQLModel, table=True):
    """A free-form label shared by blog posts and projects"""
    __tablename__ = "tags"
    name: str = Field(primary_key=True)


class BlogTag(SQLModel, table=True):
    """Many-to-many relationship between blog posts and tags, ordered for display"""
    __tablename__ = "blog_tags"
    blog_id: UUID = Field(foreign_key="blogs.id", primary_key=True)
    tag_name: str = Field(foreign_key="tags.name", primary_key=True, index=True)
    position: int = Field(default=0, nullable=False)


class ProjectTag(SQLModel, table=True):
    """Many-to-many relationship between projects and tags, ordered for display"""
    __tablename__ = "project_tags"
    project_id: UUID = Field(foreign_key="projects.id", primary_key=True)
    tag_name: str = Field(foreign_key="tags.name", primary_key=True, index=True)
    position: int = Field(default=0, nullable=False)


class Blog(SQLModel, table=True):
    """A blog post; content is the editor's JSON document"""
    __tablename__ = "blogs"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    slug: str = Field(..., sa_column=Column(String(255), nullable=False, unique=True))
    content: Dict[str, Any] = Field(..., sa_column=Column(JSON, nullable=False))
    excerpt: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    published: bool = Field(default=False, nullable=False, index=True)
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False, index=True))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class Project(SQLModel, table=True):
    """A portfolio project; description is the editor's JSON document"""
    __tablename__ = "projects"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    description: Dict[str, Any] = Field(..., sa_column=Column(JSON, nullable=False))
    image: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    github: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    date: dt.date = Field(..., sa_column=Column(Date, nullable=False, index=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
