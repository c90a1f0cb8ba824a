import sys
import http.client
import os

# 从环境变量或默认值获取端口和 API 前缀
PORT = int(os.getenv("PORT", 8000))
HOST = "localhost"
API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
PATH = f"{API_PREFIX}/auth/health"

try:
    # 使用 Python 内置的 http.client，容器里不需要额外依赖
    conn = http.client.HTTPConnection(HOST, PORT, timeout=5)
    conn.request("GET", PATH)
    response = conn.getresponse()

    if 200 <= response.status < 300:
        print(f"Health check passed with status: {response.status}")
        sys.exit(0)
    else:
        print(f"Health check failed with status: {response.status}")
        sys.exit(1)

except (OSError, http.client.HTTPException) as e:
    print(f"Health check failed with error: {e}")
    sys.exit(1)
finally:
    if 'conn' in locals():
        conn.close()
