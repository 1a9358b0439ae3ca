import os

import pytest
import yaml
from click.testing import CliRunner

from cyimages.ci_config import split_image_folder_name, form_workflow, form_aws_build_workflow, generate, \
    render_circle_config
from cyimages.enums import ImageType
from cyimages.schemas import ImageDescriptor
from cyimages.utils import camel_case


def test_split_image_folder_name():
    image = split_image_folder_name('browser/node16.5.0-chrome94')
    assert image == ImageDescriptor(name='browser', tag='node16.5.0-chrome94')


@pytest.mark.parametrize('name,tag,image_type', [
    ('base', '16.5.0', ImageType.base),
    ('browser', 'node16.5.0-chrome94', ImageType.browser),
    ('browsers', 'node16.5.0-chrome94', ImageType.browser),
    ('included', '9.0.0', ImageType.included),
    ('factory', '1.0.0', ImageType.included),
    ('base', 'browser-anything', ImageType.base),
    ('Base', '16.5.0', ImageType.included),
])
def test_image_type(name, tag, image_type):
    assert ImageDescriptor(name=name, tag=tag).image_type == image_type


def test_browser_workflow():
    image = ImageDescriptor(name='browser', tag='node16.5.0-chrome94-ff93-edge')
    assert form_workflow(image) == '''    build-browser-images:
        jobs:
            - build-browser-image:
                name: "browser node16.5.0-chrome94-ff93-edge"
                dockerTag: "node16.5.0-chrome94-ff93-edge"
                chromeVersion: "Google Chrome 94"
                firefoxVersion: "Mozilla Firefox 93"
                edgeVersion: "Microsoft Edge"'''


def test_browser_workflow_firefox_only():
    workflow = form_workflow(ImageDescriptor(name='browsers', tag='node16.5.0-ff93'))
    assert workflow.endswith('''
                dockerTag: "node16.5.0-ff93"
                firefoxVersion: "Mozilla Firefox 93"''')
    assert 'chromeVersion' not in workflow
    assert 'edgeVersion' not in workflow


def test_base_workflow_ignores_browser_segments():
    workflow = form_workflow(ImageDescriptor(name='base', tag='16.5.0-chrome94'))
    assert workflow == '''    build-base-images:
        jobs:
            - build-base-image:
                name: "base 16.5.0-chrome94"
                dockerTag: "16.5.0-chrome94"'''


def test_aws_build_workflow():
    job = form_aws_build_workflow(ImageDescriptor(name='browser', tag='node16.5.0-chrome94'))
    assert job.startswith('        - identifier: browsernode1650Chrome94\n')
    assert 'IMAGE_REPO_NAME: "cypress/browsers"' in job
    assert 'IMAGE_DIR: "browsers"' in job
    assert 'IMAGE_TAG: "node16.5.0-chrome94"' in job


def test_aws_build_workflow_included():
    job = form_aws_build_workflow(ImageDescriptor(name='included', tag='9.0.0'))
    assert '- identifier: included900\n' in job
    assert 'IMAGE_REPO_NAME: "cypress/included"' in job


@pytest.mark.parametrize('s,expected', [
    ('browsernode16.5.0-chrome94', 'browsernode1650Chrome94'),
    ('foo-bar_baz', 'fooBarBaz'),
    ('__FOO_BAR__', 'fooBar'),
    ('fooBar', 'fooBar'),
    ('base16.5.0', 'base1650'),
])
def test_camel_case(s, expected):
    assert camel_case(s) == expected


def test_circle_config():
    config = render_circle_config(ImageDescriptor(name='browser', tag='node16.5.0-edge'))
    assert config.startswith('# WARNING: this file is automatically generated by cyimages.ci_config\n')
    assert 'if [[ "$CIRCLE_BRANCH" != "master" ]]; then' in config
    assert '$$' not in config
    assert config.endswith('''workflows:
    version: 2
    lint:
        jobs:
            - lint-markdown
    build-browser-images:
        jobs:
            - build-browser-image:
                name: "browser node16.5.0-edge"
                dockerTag: "node16.5.0-edge"
                edgeVersion: "Microsoft Edge"''')


def test_generate():
    result = CliRunner().invoke(generate, ['browser', 'node16.5.0-chrome94'])
    assert result.exit_code == 0

    with open('circle.yml') as f:
        assert f.read().endswith('chromeVersion: "Google Chrome 94"\n')

    with open('buildspec.yml') as f:
        buildspec = yaml.safe_load(f)
    assert buildspec['env']['variables']['PUBLIC_ECR_ALIAS'] == 'cypress-io'
    job = buildspec['batch']['build-list'][0]
    assert job['identifier'] == 'browsernode1650Chrome94'
    assert job['env']['variables'] == {'IMAGE_REPO_NAME': 'cypress/browsers',
                                       'IMAGE_DIR': 'browsers',
                                       'IMAGE_TAG': 'node16.5.0-chrome94'}
    assert buildspec['phases']['post_build']['commands'][-1] == \
           'docker push public.ecr.aws/$PUBLIC_ECR_ALIAS/$IMAGE_REPO_NAME:$IMAGE_TAG'


def test_generate_overwrites():
    with open('circle.yml', 'w') as f:
        f.write('hand edited\n')
    result = CliRunner().invoke(generate, ['included', '9.0.0'])
    assert result.exit_code == 0
    with open('circle.yml') as f:
        config = f.read()
    assert 'hand edited' not in config
    assert 'build-included-image:\n                name: "included 9.0.0"' in config


@pytest.mark.parametrize('args,msg', [
    ([], 'expected an image type like included'),
    (['base'], 'expected Cypress version argument like 3.8.3'),
])
def test_generate_missing_arguments(args, msg):
    result = CliRunner().invoke(generate, args)
    assert result.exit_code == 1
    assert msg in result.output
    assert not os.path.exists('circle.yml')
    assert not os.path.exists('buildspec.yml')


def test_generate_ignores_extra_arguments():
    result = CliRunner().invoke(generate, ['included', '9.0.0', 'extra', '--force'])
    assert result.exit_code == 0
    with open('buildspec.yml') as f:
        assert 'IMAGE_TAG: "9.0.0"' in f.read()
