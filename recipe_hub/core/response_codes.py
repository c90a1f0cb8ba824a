from enum import Enum


class ResponseCodeEnum(Enum):

    # === 通用响应码 ===
    SUCCESS = (0, "请求成功")
    INVALID_ARGUMENT = (40000, "参数不合法")
    VALIDATION_ERROR = (40001, "参数验证失败")
    AUTH_ERROR = (40100, "认证失败")
    FORBIDDEN = (40300, "没有权限")
    NOT_FOUND = (40400, "资源不存在")
    ALREADY_EXISTS = (40900, "资源已存在")
    CONFLICT = (40901, "操作与当前状态冲突")
    SERVER_ERROR = (50000, "服务器内部错误")

    # === 用户相关 ===
    USER_ALREADY_EXISTS = (40010, "用户已存在")
    USER_NOT_FOUND = (40011, "用户不存在")
    USER_DISABLED = (40012, "用户已被禁用")

    # === 登录/注册 ===
    INVALID_CREDENTIALS = (40103, "邮箱或密码错误")
    TOKEN_EXPIRED = (40104, "Token 已过期")
    TOKEN_INVALID = (40105, "无效 Token")
    TOKEN_TYPE_MISMATCH = (40107, "Token 类型不匹配")

    # === 菜谱 / 社交 ===
    RECIPE_NOT_FOUND = (40410, "菜谱不存在")
    ALREADY_FRIENDS = (40910, "你们已经是好友了")
    FRIEND_REQUEST_PENDING = (40911, "好友请求已在处理中")

    def __init__(self, code: int, message: str):
        self._code = code
        self._message = message

    @property
    def code(self):
        return self._code

    @property
    def message(self):
        return self._message
