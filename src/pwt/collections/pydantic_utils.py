"""
配置模型使用的 Pydantic v2 辅助工具.

提供:
- format_validation_error: 将 ValidationError 展开为结构化列表, 供 ConfigurationError 携带
- convert: 字段验证前的单值转换器, 例如把日志级别转为大写
- check: 字段验证后的单值检查器, 例如校验日志格式串
- BaseModelEx: 空值回退到字段默认值的 BaseModel
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_core import PydanticCustomError, PydanticUndefined


def format_validation_error(exc: ValidationError) -> list[dict[str, Any]]:
    """
    将 Pydantic 的 ValidationError 转换为结构化错误列表.

    Returns:
        每项包含 field(点分字段路径)/message/type/input.
    """
    return [
        {
            "field": ".".join(map(str, error.get("loc", ()))),
            "message": error.get("msg", None),
            "type": error.get("type", None),
            "input": error.get("input", None),
        }
        for error in exc.errors()
    ]


def _custom_error(kind: str, reason: str) -> PydanticCustomError:
    return PydanticCustomError(kind, "{reason}", {"reason": reason})


def convert(
    func: Callable[..., Any],
    ignore_none: bool = True,
    description: str | None = None,
    **func_kwds: Any,
) -> BeforeValidator:
    """
    构造在字段验证前执行的转换器, 字段值替换为 `func(value)` 的结果.

    Args:
        func: 转换函数, 抛出异常即视为转换失败.
        ignore_none: 值为 None 时原样返回.
        description: 失败时使用的错误信息, 默认使用异常文本.
        **func_kwds: 传给 `func` 的额外关键字参数.
    """
    apply = partial(func, **func_kwds)

    def validator(value: Any) -> Any:
        if ignore_none and value is None:
            return value
        try:
            return apply(value)
        except Exception as ex:
            raise _custom_error("Convert failed", description or str(ex))

    return BeforeValidator(validator)


def check(
    func: Callable[..., Any],
    ignore_none: bool = True,
    description: str | None = None,
    **func_kwds: Any,
) -> AfterValidator:
    """
    构造在字段验证后执行的检查器, 字段值保持不变.

    Args:
        func: 检查函数, 抛出异常即视为检查失败, 返回值被忽略.
        ignore_none: 值为 None 时跳过检查.
        description: 失败时使用的错误信息, 默认使用异常文本.
        **func_kwds: 传给 `func` 的额外关键字参数.
    """
    apply = partial(func, **func_kwds)

    def validator(value: Any) -> Any:
        if ignore_none and value is None:
            return value
        try:
            apply(value)
        except Exception as ex:
            raise _custom_error("Check failed", description or str(ex))
        return value

    return AfterValidator(validator)


class BaseModelEx(BaseModel):
    """
    扩展版 BaseModel.

    字段值为空(空序列/空集合/空字符串/None)且字段有默认值时, 使用默认值;
    配置项 `validate_default` 为真时默认值也会经过验证.
    """

    @field_validator("*", mode="wrap")
    @classmethod
    def use_default_value(
        cls: type[BaseModelEx],
        value: Any,
        validator: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
        /,
    ) -> Any:
        if value in ([], {}, (), set(), "", None) and info and info.field_name:
            field_info = cls.model_fields.get(info.field_name)
            if field_info:
                default = field_info.get_default(call_default_factory=True)
                if default is not PydanticUndefined:
                    if info.config and info.config.get("validate_default"):
                        return validator(default)
                    return default
        return validator(value)
