"""adsreport: REST facade over the Google Ads and Google Sheets APIs."""
