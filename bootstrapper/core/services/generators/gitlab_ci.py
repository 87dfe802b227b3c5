"""
GitLab deployment generator — CI pipeline plus an Envoy deploy script.

The pipeline runs Envoy on every push to master; Envoy pulls the
repository on the server and re-runs the bootstrapper there, so the
production plugin set always matches october.yaml.
"""

from __future__ import annotations

from bootstrapper.core.models.config import InstallConfig
from bootstrapper.core.models.template import GeneratedFile


_GITLAB_CI = """\
stages:
  - deploy

deploy_production:
  stage: deploy
  image: composer:2
  only:
    - master
  before_script:
    - composer global require laravel/envoy --no-interaction
    - eval $(ssh-agent -s)
    - echo "$SSH_PRIVATE_KEY" | tr -d '\\r' | ssh-add -
    - mkdir -p ~/.ssh && chmod 700 ~/.ssh
  script:
    - ~/.composer/vendor/bin/envoy run deploy --commit="$CI_COMMIT_SHA"
  environment:
    name: production
    url: {url}
"""

_ENVOY = """\
@servers(['web' => 'deployer@{host}'])

@task('deploy', ['on' => 'web'])
    cd ~/public_html
    git pull origin master
    october-bootstrapper install
    php artisan cache:clear
@endtask
"""


def generate_gitlab_files(config: InstallConfig, force: bool = False) -> list[GeneratedFile]:
    """Generate .gitlab-ci.yml and Envoy.blade.php."""
    url = config.app.url
    host = url.split("://", 1)[-1].split("/", 1)[0] or "localhost"
    return [
        GeneratedFile(
            path=".gitlab-ci.yml",
            content=_GITLAB_CI.format(url=url),
            overwrite=force,
            reason="GitLab CI deployment pipeline",
        ),
        GeneratedFile(
            path="Envoy.blade.php",
            content=_ENVOY.format(host=host),
            overwrite=force,
            reason="Envoy deployment task",
        ),
    ]
