"""
Tests for the command line interface.
"""
import pytest

from redirector_app.cli import main
from redirector_app.config import Settings


@pytest.fixture
def settings(root):
    return Settings(root=root, domain=None)


@pytest.fixture
def initialized(settings, capsys):
    assert main(["init", "example.me"], settings=settings) == 0
    capsys.readouterr()
    return settings


class TestCommands:
    """Test each subcommand's output and exit status"""

    def test_init(self, settings, root, capsys):
        assert main(["init", "example.me"], settings=settings) == 0
        assert "Created new database" in capsys.readouterr().out

        assert main(["init", "example.me"], settings=settings) == 0
        assert "already exists" in capsys.readouterr().out
        assert (root / "example.me.yml").exists()

    def test_add_and_ls(self, initialized, capsys):
        """Domain is inferred from the single database under root"""
        assert main(["add", "https://example.com/test1", "test1"], settings=initialized) == 0
        assert main(["add", "https://example.com/test2", "test2"], settings=initialized) == 0
        capsys.readouterr()

        assert main(["ls"], settings=initialized) == 0

        out = capsys.readouterr().out
        assert out == (
            "test1        https://example.com/test1\n"
            "test2        https://example.com/test2\n"
        )

    def test_add_random_prints_code(self, initialized, capsys):
        assert main(["add", "https://example.com/random"], settings=initialized) == 0
        assert 'Added mapping with code "' in capsys.readouterr().out

    def test_add_conflict(self, initialized, capsys):
        main(["add", "https://a", "x"], settings=initialized)

        assert main(["add", "https://b", "x"], settings=initialized) == 1
        assert 'code "x" already exists' in capsys.readouterr().err

    def test_add_empty_url(self, initialized, capsys):
        assert main(["add", ""], settings=initialized) == 1

        err = capsys.readouterr().err
        assert "url must not be empty" in err
        assert "Traceback" not in err

    def test_update_and_rm(self, initialized, capsys):
        main(["add", "https://example.com/test1", "test1"], settings=initialized)

        assert main(["update", "https://example.com/test3", "test1"], settings=initialized) == 0
        assert main(["rm", "test1"], settings=initialized) == 0
        capsys.readouterr()

        assert main(["ls"], settings=initialized) == 0
        assert capsys.readouterr().out == ""

    def test_rm_missing(self, initialized, capsys):
        assert main(["rm", "nope"], settings=initialized) == 1
        assert "not found" in capsys.readouterr().err

    def test_push_unconfigured(self, initialized, capsys):
        assert main(["push"], settings=initialized) == 1
        assert "no 'type'" in capsys.readouterr().err

    def test_paths(self, initialized, root, capsys):
        main(["root"], settings=initialized)
        main(["config"], settings=initialized)
        main(["db"], settings=initialized)

        assert capsys.readouterr().out.splitlines() == [
            str(root),
            str(root / "redirector.yml"),
            str(root / "example.me.yml"),
        ]

    def test_no_domain(self, settings, capsys):
        assert main(["ls"], settings=settings) == 1
        assert "domain not specified" in capsys.readouterr().err

    def test_missing_command(self, settings):
        with pytest.raises(SystemExit) as excinfo:
            main([], settings=settings)
        assert excinfo.value.code == 2
