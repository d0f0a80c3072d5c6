"""Application state SQLModel models."""

from sqlmodel import Field, SQLModel


# 日本語: 端末ローカル設定に相当するキー/値 / English: Key/value store for device-level app state
class AppSetting(SQLModel, table=True):
    __tablename__ = "app_setting"

    key: str = Field(primary_key=True, max_length=100)
    value: str | None = Field(default=None, max_length=200)
