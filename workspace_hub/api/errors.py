"""
统一错误响应格式: {"error": ..., "code": ..., "status": ...}
"""

import logging

from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from ..constants import ErrorCode
from ..exceptions import ValidationError, WorkspaceHubError


logger = logging.getLogger(__name__)


def error_payload(exc: WorkspaceHubError) -> dict:
    """领域异常转换为响应体"""
    payload = {
        'error': exc.message,
        'code': exc.error_code,
        'status': exc.status_code,
    }
    details = getattr(exc, 'details', None)
    if details:
        payload['details'] = details
    return payload


def error_response(exc: WorkspaceHubError) -> Response:
    return Response(error_payload(exc), status=exc.status_code)


def exception_handler(exc, context):
    """
    DRF 异常处理器

    在 REST_FRAMEWORK['EXCEPTION_HANDLER'] 中配置，
    让框架自身的异常 (JSON解析失败、405等) 与领域异常使用同样的格式。
    """
    if isinstance(exc, WorkspaceHubError):
        return error_response(exc)

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        code = ErrorCode.VALIDATION_ERROR
        message = 'Invalid request'
        details = response.data
    else:
        code = _error_code_for(exc)
        message = str(getattr(exc, 'detail', exc))
        details = None

    response.data = {
        'error': message,
        'code': code,
        'status': response.status_code,
    }
    if details:
        response.data['details'] = details
    return response


def _error_code_for(exc):
    if isinstance(exc, drf_exceptions.MethodNotAllowed):
        return ErrorCode.METHOD_NOT_ALLOWED
    if isinstance(exc, drf_exceptions.NotFound):
        return ErrorCode.NOT_FOUND
    if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
        return ErrorCode.TOKEN_INVALID
    if isinstance(exc, drf_exceptions.PermissionDenied):
        return ErrorCode.PERMISSION_DENIED
    if isinstance(exc, drf_exceptions.ParseError):
        return ErrorCode.VALIDATION_ERROR
    return getattr(exc, 'default_code', ErrorCode.INTERNAL_ERROR)


def raise_for_serializer(serializer, message='Invalid request'):
    """序列化器校验失败时抛出领域验证异常"""
    if not serializer.is_valid():
        logger.debug(f"Request validation failed: {serializer.errors}")
        raise ValidationError(message, details=serializer.errors)
    return serializer.validated_data
