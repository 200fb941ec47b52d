"""Tests for capture date resolution and repair."""

from unittest.mock import patch

from iphone_to_pixel.dates import (
    PHOTO_DATE_CHAIN,
    VIDEO_DATE_CHAIN,
    copy_dates_from_source,
    filesystem_date_targets,
    fix_dates_from_timestamp,
    fix_dates_in_place,
    fix_dates_on_photo,
    has_valid_create_date,
    has_valid_photo_date,
    is_valid_date,
    read_date_tags,
    select_date,
    unix_to_exif_date,
)


class TestIsValidDate:
    """Tests for the date validity check."""

    def test_regular_date(self):
        assert is_valid_date("2023:06:01 10:00:00")
        assert is_valid_date("2023:06:01 10:00:00+02:00")

    def test_empty_values(self):
        assert not is_valid_date("")
        assert not is_valid_date("   \n")
        assert not is_valid_date(None)

    def test_zero_date_is_missing(self):
        """The zero-date sentinel must never count as a real date."""
        assert not is_valid_date("0000:00:00 00:00:00")
        assert not is_valid_date("0000:00:00 00:00:00+00:00")


class TestSelectDate:
    """Tests for priority-ordered date selection."""

    def test_highest_priority_wins(self):
        tags = {"MediaCreateDate": "2020:01:01 00:00:00", "CreationDate": "2023:06:02 11:00:00+02:00"}
        assert select_date(tags, VIDEO_DATE_CHAIN) == "2023:06:02 11:00:00+02:00"

    def test_falls_back_to_lower_priority(self):
        tags = {"MediaCreateDate": "2020:01:01 00:00:00"}
        assert select_date(tags, VIDEO_DATE_CHAIN) == "2020:01:01 00:00:00"

    def test_zero_date_does_not_shadow_lower_priority(self):
        """A zero CreationDate must not win over a valid MediaCreateDate."""
        tags = {"MediaCreateDate": "2020:01:01 00:00:00", "CreationDate": "0000:00:00 00:00:00"}
        assert select_date(tags, VIDEO_DATE_CHAIN) == "2020:01:01 00:00:00"

    def test_photo_chain_prefers_datetime_original(self):
        tags = {
            "DateTimeDigitized": "2023:01:01 09:00:00",
            "CreateDate": "2023:01:01 09:30:00",
            "DateTimeOriginal": "2023:01:01 08:00:00",
        }
        assert select_date(tags, PHOTO_DATE_CHAIN) == "2023:01:01 08:00:00"

    def test_no_valid_dates(self):
        assert select_date({}, VIDEO_DATE_CHAIN) is None
        assert select_date({"CreateDate": "0000:00:00 00:00:00"}, VIDEO_DATE_CHAIN) is None


class TestUnixToExifDate:
    """Tests for timestamp formatting."""

    def test_formats_utc(self):
        assert unix_to_exif_date(86400) == "1970:01:02 00:00:00"
        assert unix_to_exif_date(1685613600) == "2023:06:01 10:00:00"


class TestReadTags:
    """Tests for exiftool reads."""

    def test_read_date_tags_only_returns_present_tags(self, tmp_path, media_tools):
        video = media_tools.add_video(tmp_path / "clip.mov", CreateDate="2021:05:05 12:00:00")

        tags = read_date_tags(video, VIDEO_DATE_CHAIN)

        assert tags == {"CreateDate": "2021:05:05 12:00:00"}
        cmd = media_tools.calls_to("exiftool")[-1]
        assert "-j" in cmd
        assert "QuickTimeUTC" in cmd

    def test_read_date_tags_bad_output(self, tmp_path):
        """Unparseable exiftool output reads as no tags."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value.stdout = "not json"
            mock_run.return_value.returncode = 0
            assert read_date_tags(tmp_path / "x.mov", VIDEO_DATE_CHAIN) == {}

    def test_has_valid_create_date(self, tmp_path, media_tools):
        good = media_tools.add_video(tmp_path / "good.mov", CreateDate="2021:05:05 12:00:00")
        zero = media_tools.add_video(tmp_path / "zero.mov", CreateDate="0000:00:00 00:00:00")
        bare = media_tools.add_video(tmp_path / "bare.mov")

        assert has_valid_create_date(good)
        assert not has_valid_create_date(zero)
        assert not has_valid_create_date(bare)

    def test_has_valid_photo_date(self, tmp_path, media_tools):
        good = media_tools.add_photo(tmp_path / "a.jpg", DateTimeOriginal="2019:02:03 04:05:06")
        other = media_tools.add_photo(tmp_path / "b.jpg", CreateDate="2019:02:03 04:05:06")

        assert has_valid_photo_date(good)
        assert not has_valid_photo_date(other)


class TestCopyDatesFromSource:
    """Tests for the video date chain copy."""

    def test_creation_date_beats_media_create_date(self, tmp_path, media_tools):
        """Highest priority tag wins when several are present."""
        source = media_tools.add_video(
            tmp_path / "IMG_0002.MOV",
            MediaCreateDate="2024:01:01 00:00:00",
            CreationDate="2023:06:02 11:00:00+02:00",
        )
        target = media_tools.add_video(tmp_path / "IMG_0002.mp4")

        written = copy_dates_from_source(source, target)

        assert written == "2023:06:02 11:00:00+02:00"
        tags = media_tools.tags_of(target)
        assert tags["CreateDate"] == "2023:06:02 11:00:00+02:00"
        assert tags["DateTimeOriginal"] == "2023:06:02 11:00:00+02:00"
        assert tags["FileModifyDate"] == "2023:06:02 11:00:00+02:00"

    def test_writes_track_and_media_dates(self, tmp_path, media_tools):
        source = media_tools.add_video(tmp_path / "in.mov", CreateDate="2022:02:02 02:02:02")
        target = media_tools.add_video(tmp_path / "out.mp4")

        copy_dates_from_source(source, target)

        write_cmd = media_tools.calls_to("exiftool")[-1]
        assert "-Track*Date=2022:02:02 02:02:02" in write_cmd
        assert "-Media*Date=2022:02:02 02:02:02" in write_cmd
        assert "-overwrite_original" in write_cmd

    def test_no_source_date_writes_nothing(self, tmp_path, media_tools):
        source = media_tools.add_video(tmp_path / "in.mov", MediaCreateDate="0000:00:00 00:00:00")
        target = media_tools.add_video(tmp_path / "out.mp4")

        assert copy_dates_from_source(source, target) is None
        assert media_tools.tags_of(target) == {}

    def test_fix_in_place_promotes_partial_tags(self, tmp_path, media_tools):
        video = media_tools.add_video(tmp_path / "clip.mov", ContentCreateDate="2018:08:08 08:08:08")

        fix_dates_in_place(video)

        assert has_valid_create_date(video)


class TestFixDatesOnPhoto:
    """Tests for the photo date chain."""

    def test_sets_filesystem_dates(self, tmp_path, media_tools):
        photo = media_tools.add_photo(
            tmp_path / "IMG.HEIC",
            DateTimeDigitized="2023:01:01 09:00:00",
            DateTimeOriginal="2023:01:01 08:00:00",
        )

        assert fix_dates_on_photo(photo) == "2023:01:01 08:00:00"

        tags = media_tools.tags_of(photo)
        for target in filesystem_date_targets():
            assert tags[target] == "2023:01:01 08:00:00"
        assert "-P" in media_tools.calls_to("exiftool")[-1]

    def test_embed_writes_datetime_original(self, tmp_path, media_tools):
        photo = media_tools.add_photo(tmp_path / "IMG.JPG", CreateDate="2015:05:05 05:05:05")

        fix_dates_on_photo(photo, embed=True)

        assert has_valid_photo_date(photo)

    def test_without_embed_leaves_exif_alone(self, tmp_path, media_tools):
        photo = media_tools.add_photo(tmp_path / "IMG.JPG", CreateDate="2015:05:05 05:05:05")

        fix_dates_on_photo(photo)

        assert "DateTimeOriginal" not in media_tools.tags_of(photo)


class TestFixDatesFromTimestamp:
    """Tests for sidecar timestamp writes."""

    def test_flat_assignment(self, tmp_path, media_tools):
        photo = media_tools.add_photo(tmp_path / "IMG.JPG")

        value = fix_dates_from_timestamp(photo, 1685613600)

        assert value == "2023:06:01 10:00:00"
        tags = media_tools.tags_of(photo)
        for tag in ("DateTimeOriginal", "CreateDate", "ModifyDate", "FileModifyDate"):
            assert tags[tag] == value

    def test_filesystem_targets_by_platform(self):
        with patch("sys.platform", "linux"):
            assert filesystem_date_targets() == ("FileModifyDate",)
        with patch("sys.platform", "darwin"):
            assert "FileCreateDate" in filesystem_date_targets()
