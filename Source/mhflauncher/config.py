import os
import shlex

# Fixed loopback server used by the "Local Server" host option
LOCAL_URL = os.getenv("MHFLAUNCHER_LOCAL_URL", "http://127.0.0.1:8080")

# Operator-supplied server URL for the "Custom" host option
CUSTOM_HOST = os.getenv("MHFLAUNCHER_CUSTOM_HOST", "")

# Game installation handed to the runtime as its working folder
MHF_FOLDER = os.getenv("MHFLAUNCHER_MHF_FOLDER", "F:/Games/Monster Hunter Frontier Online")

# Command that takes over once a character is started (config JSON on stdin)
RUNTIME_CMD = shlex.split(os.getenv("MHFLAUNCHER_RUNTIME_CMD", ""))

# Endpoints (relative to the selected host)
LOGIN_PATH = "login"
REGISTER_PATH = "register"
CHARACTER_CREATE_PATH = "character/create"
CHARACTER_DELETE_PATH = "character/delete"

DEFAULT_HEADERS = {
    "accept": "application/json",
    "content-type": "application/json",
    "user-agent": "mhflauncher/0.1",
}
