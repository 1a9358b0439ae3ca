import os
import shlex
import sys

from pydantic import Field
from pydantic_settings import BaseSettings


class GeneratorSettings(BaseSettings):
    IMAGES_ROOT: str = '.'
    CONFIG_OUTPUT_DIR: str = '.'

    TEMPLATE_DIR: str = os.path.join(os.path.dirname(__file__), 'templates')

    ENCODING: str = 'utf8'

    BASE_IMAGE: str = 'cypress/base'
    BROWSERS_IMAGE: str = 'cypress/browsers'
    PUBLIC_ECR_ALIAS: str = 'cypress-io'

    # downstream generators, launched without waiting for them
    CONFIG_GENERATOR_CMD: str = Field(
        default_factory=lambda: f'{shlex.quote(sys.executable)} -m cyimages.ci_config')
    README_GENERATOR_CMD: str = 'node scripts/generate-browser-readme.js'
    COMMIT_GENERATOR_CMD: str = 'node scripts/generate-commit.js'
    TRIGGER_DOWNSTREAM: bool = True

    LOG_LEVEL: str = 'INFO'

    def get_browsers_dir(self):
        return os.path.join(self.IMAGES_ROOT, 'browsers')


settings = GeneratorSettings()
