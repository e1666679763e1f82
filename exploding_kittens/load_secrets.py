import os
from dotenv import load_dotenv

load_dotenv()

redis_host = os.getenv("REDIS_HOST", "localhost")
redis_port = int(os.getenv("REDIS_PORT", "6379"))
redis_password = os.getenv("REDIS_PASSWORD") or None
redis_db = int(os.getenv("REDIS_DB", "0"))
redis_socket_timeout = float(os.getenv("REDIS_SOCKET_TIMEOUT", "5.0"))
server_host = os.getenv("SERVER_HOST", "0.0.0.0")
server_port = int(os.getenv("SERVER_PORT", "8080"))
log_level = os.getenv("LOG_LEVEL", "INFO").upper()

if __name__ == "__main__":
    print(redis_host, redis_port, redis_db, redis_socket_timeout, server_host, server_port, log_level)
