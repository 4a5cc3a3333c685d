"""Static bundle-id to category table used by the classifier."""

from profile_module.models import AppCategory

IDE = AppCategory.IDE
BROWSER = AppCategory.BROWSER
DESIGN = AppCategory.DESIGN
PRODUCTIVITY = AppCategory.PRODUCTIVITY
COMMUNICATION = AppCategory.COMMUNICATION
MEDIA = AppCategory.MEDIA
DEVELOPMENT = AppCategory.DEVELOPMENT
TERMINAL = AppCategory.TERMINAL
OTHER = AppCategory.OTHER

CATEGORY_MAPPINGS: dict[str, AppCategory] = {
    # IDEs
    "com.apple.dt.Xcode": IDE,
    "com.microsoft.VSCode": IDE,
    "com.microsoft.VSCodeInsiders": IDE,
    "com.jetbrains.intellij": IDE,
    "com.jetbrains.intellij.ce": IDE,
    "com.jetbrains.AppCode": IDE,
    "com.jetbrains.CLion": IDE,
    "com.jetbrains.pycharm": IDE,
    "com.jetbrains.rider": IDE,
    "com.google.android.studio": IDE,
    "org.eclipse.ide": IDE,
    "com.sublimetext.4": IDE,
    "io.vscode": IDE,
    "com.froglogic.Squish": IDE,
    "net.sourceforge.ProjectHub": IDE,
    # Browsers
    "com.apple.Safari": BROWSER,
    "com.google.Chrome": BROWSER,
    "com.google.Chrome.beta": BROWSER,
    "com.google.Chrome.dev": BROWSER,
    "com.google.Chrome.canary": BROWSER,
    "org.mozilla.firefox": BROWSER,
    "com.mozillafirefox": BROWSER,
    "com.microsoft.edgemac": BROWSER,
    "com.brave.Browser": BROWSER,
    "com.operasoftware.Opera": BROWSER,
    "com.vivaldi.Vivaldi": BROWSER,
    "org.torproject.torbrowser": BROWSER,
    "com.arc.arc": BROWSER,
    # Design
    "com.figma.Desktop": DESIGN,
    "com.figma.Agent": DESIGN,
    "com.adobe.Photoshop": DESIGN,
    "com.adobe.Illustrator": DESIGN,
    "com.adobe.AfterEffects": DESIGN,
    "com.adobe.Premiere": DESIGN,
    "com.adobe.Lightroom": DESIGN,
    "com.adobe.Indesign": DESIGN,
    "com.adobe.XD": DESIGN,
    "com.adobe.Dimension": DESIGN,
    "com.adobe.CharacterAnimator": DESIGN,
    "com.sketch.sketch": DESIGN,
    "com.bohemiancoding.sketch3": DESIGN,
    "com.protopie.Protopie": DESIGN,
    "com.invisionapp.InvisionStudio": DESIGN,
    "com.axure.axureRP": DESIGN,
    "com.seriflabs.affinityphoto": DESIGN,
    "com.seriflabs.affinitydesigner": DESIGN,
    "com.autodesk.SketchBook": DESIGN,
    "com.blenderfoundation.blender": DESIGN,
    # Communication
    "us.zoom.xos": COMMUNICATION,
    "us.zoom.Zoom": COMMUNICATION,
    "com.hnc.Discord": COMMUNICATION,
    "com.hnc.Discord.Canary": COMMUNICATION,
    "com.slack.Slack": COMMUNICATION,
    "com.tinyspeck.slackmacgap": COMMUNICATION,
    "com.apple.MobileSMS": COMMUNICATION,
    "com.microsoft.teams": COMMUNICATION,
    "com.microsoft.teams2": COMMUNICATION,
    "ru.yandex.YandexMessenger": COMMUNICATION,
    "org.telegram.TelegramDesktop": COMMUNICATION,
    # Productivity
    "com.microsoft.Word": PRODUCTIVITY,
    "com.microsoft.Excel": PRODUCTIVITY,
    "com.microsoft.PowerPoint": PRODUCTIVITY,
    "com.microsoft.onenote.mac": PRODUCTIVITY,
    "com.microsoft.Outlook": PRODUCTIVITY,
    "com.apple.iWork.Pages": PRODUCTIVITY,
    "com.apple.iWork.Numbers": PRODUCTIVITY,
    "com.apple.iWork.Keynote": PRODUCTIVITY,
    "com.apple.Notes": PRODUCTIVITY,
    "com.apple.reminders": PRODUCTIVITY,
    "com.apple.calculator": PRODUCTIVITY,
    "notion.id": PRODUCTIVITY,
    "com.electron.notion": PRODUCTIVITY,
    "com.agilebits.onepassword7": PRODUCTIVITY,
    "xyz.obsidian.Obsidian": PRODUCTIVITY,
    "com.typora.typora-free": PRODUCTIVITY,
    "com.barebones.TextWrangler": PRODUCTIVITY,
    "com.macromates.TextMate": PRODUCTIVITY,
    # Development
    "com.github.GitHubDesktop": DEVELOPMENT,
    "com.github.SourceTree": DEVELOPMENT,
    "com.gitbox.mac": DEVELOPMENT,
    "com.postmanlabs.mac": DEVELOPMENT,
    "com.fuelapp.Fuel": DEVELOPMENT,
    # Terminal
    "com.apple.Terminal": TERMINAL,
    "com.googlecode.iterm2": TERMINAL,
    "com.warp.Warp-Stable": TERMINAL,
    "net.kovidgoyal.kitty": TERMINAL,
    "org.alacritty": TERMINAL,
    "co.zeb.zebra": TERMINAL,
    # Media
    "com.spotify.client": MEDIA,
    "com.apple.Music": MEDIA,
    "com.apple.TV": MEDIA,
    "com.apple.iTunes": MEDIA,
    "com.apple.QuickTimePlayerX": MEDIA,
    "org.videolan.vlc": MEDIA,
    "com.soundcloud.desktop": MEDIA,
    # System
    "com.apple.finder": OTHER,
    "com.apple.systempreferences": OTHER,
}
