def load_env_file() -> None:
    """Load environment variables from .env file if not already set.

    WHAT:
        Loads variables from a local .env file into os.environ.
        Does NOT overwrite existing environment variables.
    WHY:
        Lets developers keep Google credentials in a local .env file
        without overwriting variables set by the deployment.
    """
    import logging
    from dotenv import load_dotenv

    logger = logging.getLogger(__name__)

    # Returns True as long as the file exists, even if it set nothing
    loaded = load_dotenv(override=False)

    if loaded:
        logger.info("Loaded local .env file (existing variables were NOT overwritten)")
    else:
        logger.debug("No local .env file found or loaded")
