import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASS", ""),
    "database": os.getenv("DB_NAME", "time_tracker"),
}

MAIL_CONFIG = {
    "host": os.getenv("SMTP_HOST", "smtp.gmail.com"),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "user": os.getenv("MAIL_USER", ""),
    "password": os.getenv("MAIL_PASS", ""),
    "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "1"))),
    "sender": os.getenv("MAIL_FROM", ""),
    "timeout": int(os.getenv("SMTP_TIMEOUT", "15")),
}

HR_EMAIL = os.getenv("HR_EMAIL", "hr@company.com")
COMPANY_NAME = os.getenv("COMPANY_NAME", "Sense Projects Pvt Ltd")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
