from dotenv import load_dotenv

# Load environment variables from .env as early as possible so settings
# built at application startup see the configured WordPress endpoint.
load_dotenv()
