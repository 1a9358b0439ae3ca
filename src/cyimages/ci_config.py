import os
import posixpath
import re
from typing import Optional

import click
from loguru import logger

from cyimages.enums import ImageType
from cyimages.exceptions import InvalidArgument
from cyimages.schemas import ImageDescriptor
from cyimages.settings import settings
from cyimages.templating import Fragment, compose, render
from cyimages.utils import configure_logging, camel_case, write_file, EXTRA_ARGS_SETTINGS, warn_ignored_args

GENERATOR = 'cyimages.ci_config'

CHROME_SEGMENT_REGEX = re.compile(r'-chrome(\d*)')
FIREFOX_SEGMENT_REGEX = re.compile(r'-ff(\d*)')


def is_browser(image: ImageDescriptor) -> bool:
    return image.image_type == ImageType.browser


def segment_major(regex: re.Pattern, tag: str) -> Optional[str]:
    m = regex.search(tag)
    return m.group(1) if m else None


WORKFLOW_FRAGMENTS = [
    Fragment('ci/circle-workflow', strip=False),
    Fragment('ci/circle-chrome', lambda image: is_browser(image) and '-chrome' in image.tag, strip=False),
    Fragment('ci/circle-firefox', lambda image: is_browser(image) and '-ff' in image.tag, strip=False),
    Fragment('ci/circle-edge', lambda image: is_browser(image) and '-edge' in image.tag, strip=False),
]


def split_image_folder_name(folder_name: str) -> ImageDescriptor:
    name, tag = folder_name.split('/')[:2]
    return ImageDescriptor(name=name, tag=tag)


def form_workflow(image: ImageDescriptor) -> str:
    context = dict(image_type=image.image_type.value,
                   tag=image.tag,
                   chrome_major=segment_major(CHROME_SEGMENT_REGEX, image.tag) or '',
                   firefox_major=segment_major(FIREFOX_SEGMENT_REGEX, image.tag) or '')
    return compose(WORKFLOW_FRAGMENTS, image, context, separator='\n')


def form_aws_build_workflow(image: ImageDescriptor) -> str:
    return render('ci/buildspec-job', dict(identifier=camel_case(f'{image.name}{image.tag}'),
                                           image_folder=image.image_folder,
                                           tag=image.tag), strip=False)


def render_circle_config(image: ImageDescriptor) -> str:
    preamble = render('ci/circle-preamble', dict(generator=GENERATOR))
    return preamble + '\n' + form_workflow(image)


def render_buildspec(image: ImageDescriptor) -> str:
    preamble = render('ci/buildspec-preamble', dict(public_ecr_alias=settings.PUBLIC_ECR_ALIAS))
    postamble = render('ci/buildspec-postamble', {})
    return preamble + '\n' + form_aws_build_workflow(image) + '\n\n' + postamble


def write_config_file(image: ImageDescriptor) -> str:
    path = os.path.join(settings.CONFIG_OUTPUT_DIR, 'circle.yml')
    write_file(path, render_circle_config(image))
    logger.info('Generated circle.yml')
    return path


def write_buildspec_file(image: ImageDescriptor) -> str:
    path = os.path.join(settings.CONFIG_OUTPUT_DIR, 'buildspec.yml')
    write_file(path, render_buildspec(image))
    logger.info('Generated buildspec.yml')
    return path


def generate_config(image_type: str, version_tag: str) -> ImageDescriptor:
    output_folder = posixpath.join(image_type, version_tag)
    logger.info(f'** outputFolder : {output_folder}')

    image = split_image_folder_name(output_folder)
    logger.info(f'** image : {image}')

    write_config_file(image)
    write_buildspec_file(image)
    return image


@click.command(help='Generate circle.yml and buildspec.yml for one image',
               context_settings=EXTRA_ARGS_SETTINGS)
@click.argument('image_type', required=False)
@click.argument('version_tag', required=False)
def generate(image_type: str, version_tag: str):
    configure_logging()
    warn_ignored_args()
    if not image_type:
        raise InvalidArgument('expected an image type like included')
    if not version_tag:
        raise InvalidArgument('expected Cypress version argument like 3.8.3')
    generate_config(image_type, version_tag)


if __name__ == '__main__':
    generate()
