# fixed reply texts (Telegram HTML parse mode), built once from settings

from dataclasses import dataclass

from pairing_bot.bot.render import join_days
from pairing_bot.config import Settings, settings


@dataclass(frozen=True)
class Texts:
    help: str
    subscribed: str
    already_subscribed: str
    unsubscribed: str
    not_subscribed: str
    schedule_set: str
    streams_set: str
    skipped: str
    unskipped: str
    read_error: str
    write_error: str
    private_only: str
    not_allowed: str

    # status
    status: str
    no_days: str
    no_streams: str
    any_stream_item: str
    stream_item: str
    skipping: str
    not_skipping: str

    # days switched on by `subscribe`, the same ones `subscribed` lists
    default_schedule: tuple[str, ...]


def build_texts(s: Settings) -> Texts:
    default_days = join_days(s.default_schedule, wrap="<b>{}</b>") or "no days"
    match_time = f"{s.match_hour:02d}:{s.match_minute:02d} {s.tz}"

    help_text = (
        "<b>How to use Pairing Bot:</b>\n"
        "• <code>subscribe</code> to start getting matched with other Pairing Bot users for pair programming\n"
        "• <code>schedule monday wednesday friday</code> to set your weekly pairing schedule\n"
        "   ◦ In this example, I'll find pairing partners for you on every Monday, Wednesday, and Friday\n"
        "   ◦ You can schedule pairing for any combination of days in the week\n"
        "• <code>streams any 2 pairing 1 math 1</code> to pick topics and how many pairings per day you want in each\n"
        "   ◦ That example asks for 2 pairings with anyone, 1 with someone into pair programming "
        "and 1 with someone who'd like to talk about math, on the days you're available\n"
        "   ◦ A topic can be any single word. Stream names without spaces work well\n"
        "• <code>skip tomorrow</code> to skip pairing tomorrow\n"
        f"   ◦ This is valid until matches go out at {match_time}\n"
        "• <code>unskip tomorrow</code> to undo skipping tomorrow\n"
        "• <code>status</code> to show your current schedule, streams, skip status, and name\n"
        "• <code>unsubscribe</code> to stop getting matched entirely\n"
        "\n"
        f"If you've found a bug, please <a href=\"{s.issues_url}\">submit an issue</a>!"
    )

    return Texts(
        help=help_text,
        subscribed=(
            "Yay! You're now subscribed to Pairing Bot!\n"
            f"Currently, I'm set to find pair programming partners for you on {default_days}.\n"
            "You can customize your schedule any time with <code>schedule</code> :)"
        ),
        already_subscribed="You're already subscribed! Use <code>schedule</code> to set your schedule.",
        unsubscribed=(
            "You're unsubscribed!\n"
            "I won't find pairing partners for you unless you <code>subscribe</code>.\n\n"
            "Be well :)"
        ),
        not_subscribed="You're not subscribed to Pairing Bot &lt;3",
        schedule_set="Awesome, your new schedule's been set! You can check it with <code>status</code>.",
        streams_set="Awesome, your streams have been set! You can check them with <code>status</code>.",
        skipped="Tomorrow: cancelled. I feel you. <b>I will not match you</b> for pairing tomorrow &lt;3",
        unskipped="Tomorrow: uncancelled! Heckin <i>yes</i>! <b>I will match you</b> for pairing tomorrow :)",
        read_error=f"Something went sideways while reading from the database. You should probably ping {s.maintainer}",
        write_error=f"Something went sideways while writing to the database. You should probably ping {s.maintainer}",
        private_only="plz don't @ me i only do private messages &lt;3",
        not_allowed="uwu, I'm not taking new pairs just yet",
        status=(
            "• You're {name}\n"
            "• You're scheduled for pairing on <b>{days}</b>\n"
            "• We'll try and find you {streams}\n"
            "• <b>{skip}</b> pairing tomorrow"
        ),
        no_days="no days yet (pick some with <code>schedule</code>)",
        no_streams="pairings in no particular streams yet (pick some with <code>streams</code>)",
        any_stream_item="{count} pairings with any recurser",
        stream_item="{count} pairings with a recurser from stream {stream}",
        skipping="You're set to skip",
        not_skipping="You're not set to skip",
        default_schedule=s.default_schedule,
    )


texts = build_texts(settings)
