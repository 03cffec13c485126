"""
Command line pipeline tests

Runs main() on templates written to a temporary site directory.
"""

import pytest

from highlight_param.__main__ import main


TEMPLATE = (
    "<h1>{{ site.title }}</h1>\n"
    "{% highlight_param {{ lang }} %}\n"
    "a < b\n"
    "{% endhighlight_param %}\n"
    "{% highlight_param text linenos %}\n"
    "x\n"
    "{% endhighlight_param %}\n"
)


@pytest.fixture
def site_dir(tmp_path):
    """Site directory with a template and a config"""
    site = tmp_path / "site"
    site.mkdir()
    (site / "page.html").write_text(
        "{% set lang = site.default_lang %}" + TEMPLATE, encoding="utf-8"
    )
    (site / "_config.yml").write_text(
        "title: Demo\n"
        "highlighter: none\n"
        "default_lang: text\n"
        "highlighter_prefix: '<figure>'\n"
        "highlighter_suffix: '</figure>'\n",
        encoding="utf-8",
    )
    return site


class TestRender:
    """Test rendering a page from the command line"""

    def test_output_written(self, site_dir, tmp_path):
        outdir = tmp_path / "out"
        main([str(site_dir), str(outdir), "--inputFile", "page.html"])

        html = (outdir / "page.html").read_text(encoding="utf-8")
        assert "<h1>Demo</h1>" in html
        assert (
            '<figure><div class="highlight language-text" data-lang="text">'
            "a &lt; b</div></figure>"
        ) in html

    def test_highlighter_override(self, site_dir, tmp_path):
        """--highlighter beats the site config"""
        outdir = tmp_path / "out"
        main([
            str(site_dir), str(outdir), "--inputFile", "page.html",
            "--highlighter", "rouge",
        ])

        html = (outdir / "page.html").read_text(encoding="utf-8")
        assert '<span class="gutter gl">1 </span>x' in html

    def test_output_file_name(self, site_dir, tmp_path):
        outdir = tmp_path / "out"
        main([
            str(site_dir), str(outdir), "--inputFile", "page.html",
            "--outputFile", "index.html",
        ])

        assert (outdir / "index.html").is_file()
        assert not (outdir / "page.html").exists()

    def test_stylesheet_written(self, site_dir, tmp_path):
        outdir = tmp_path / "out"
        main([
            str(site_dir), str(outdir), "--inputFile", "page.html",
            "--style", "default",
        ])

        css = (outdir / "highlight.css").read_text(encoding="utf-8")
        assert ".highlight" in css

    def test_bare_style_uses_configured_style(self, site_dir, tmp_path):
        """--style without a name falls back to the configured style"""
        outdir = tmp_path / "out"
        main([str(site_dir), str(outdir), "--inputFile", "page.html", "--style"])

        assert (outdir / "highlight.css").is_file()

    def test_without_site_config(self, tmp_path):
        """A site without _config.yml renders on defaults"""
        site = tmp_path / "bare"
        site.mkdir()
        (site / "page.html").write_text(
            "{% highlight_param text %}x{% endhighlight_param %}", encoding="utf-8"
        )
        outdir = tmp_path / "out"
        main([str(site), str(outdir), "--inputFile", "page.html"])

        assert (outdir / "page.html").read_text(encoding="utf-8") == (
            '<div class="highlight language-text" data-lang="text">x</div>'
        )


class TestFailures:
    """Test that failures exit with status 1"""

    def test_missing_input(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path), str(tmp_path / "out"), "--inputFile", "absent.html"])
        assert excinfo.value.code == 1

    def test_invalid_tag(self, tmp_path):
        (tmp_path / "page.html").write_text(
            "{% highlight_param ruby ;;; %}x{% endhighlight_param %}", encoding="utf-8"
        )
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path), str(tmp_path / "out"), "--inputFile", "page.html"])
        assert excinfo.value.code == 1

    def test_bad_config(self, site_dir, tmp_path):
        (site_dir / "_config.yml").write_text("- not\n- a mapping\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main([str(site_dir), str(tmp_path / "out"), "--inputFile", "page.html"])
        assert excinfo.value.code == 1

    def test_unknown_style(self, site_dir, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main([
                str(site_dir), str(tmp_path / "out"), "--inputFile", "page.html",
                "--style", "no-such-style",
            ])
        assert excinfo.value.code == 1
